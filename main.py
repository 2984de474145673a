"""
Probabilistic Modeling - 概率建模教学代码
主入口文件

使用Hydra进行配置管理，可以灵活运行不同章节的代码。

使用方法:
    python main.py                              # 运行所有章节
    python main.py run=mle                      # 只运行最大似然估计
    python main.py run=markov                   # 只运行马尔可夫链
    python main.py visualization.show_plots=false
    python main.py section.mle.optimizer.method=golden
"""

import hydra
from omegaconf import DictConfig
import numpy as np
import matplotlib.pyplot as plt
import warnings

from probmodels.sections import SECTIONS, resolve_sections, run_section

# 设置matplotlib和numpy的配置
plt.rcParams['font.sans-serif'] = ['DejaVu Sans']
plt.rcParams['axes.unicode_minus'] = False
np.set_printoptions(precision=4, suppress=True)
warnings.filterwarnings('ignore')


@hydra.main(version_base=None, config_path="configs", config_name="config")
def main(cfg: DictConfig) -> None:
    """
    主函数：根据配置运行相应章节的代码

    1. 接收Hydra配置
    2. 设置随机种子确保可重复性
    3. 运行 cfg.run 指定的章节

    Args:
        cfg: Hydra配置对象，包含所有运行参数
    """
    np.random.seed(cfg.general.seed)

    print("=" * 80)
    print("Probabilistic Modeling - 概率建模")
    print("教学代码实现")
    print("=" * 80)

    for name in resolve_sections(cfg.run):
        print(f"\n正在运行: {SECTIONS[name]['title']}")
        print("-" * 80)
        run_section(name, cfg)

    print("\n" + "=" * 80)
    print("运行完成！")
    print("=" * 80)


if __name__ == "__main__":
    main()
