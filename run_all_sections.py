#!/usr/bin/env python3
"""
Probabilistic Modeling 完整演示
===============================

不经过Hydra命令行，直接运行所有（或指定的）章节。
配置仍然来自 configs/ 目录，通过Hydra的compose API读取。

使用方法：
python run_all_sections.py                    # 运行所有章节
python run_all_sections.py --section mle      # 运行特定章节
python run_all_sections.py --list             # 列出所有章节
python run_all_sections.py --no-plots         # 不显示图形

依赖：
- numpy, scipy, matplotlib
- hydra-core, omegaconf
"""

import sys
import argparse
import traceback
from pathlib import Path
from typing import List, Optional
import warnings
warnings.filterwarnings('ignore')

from hydra import compose, initialize_config_dir
from omegaconf import DictConfig
import numpy as np
import matplotlib.pyplot as plt

from probmodels.sections import SECTIONS, resolve_sections, run_section

plt.rcParams['font.sans-serif'] = ['DejaVu Sans']
plt.rcParams['axes.unicode_minus'] = False
np.set_printoptions(precision=4, suppress=True)

CONFIG_DIR = Path(__file__).resolve().parent / "configs"


def print_header():
    """打印项目头部信息"""
    print("\n" + "="*80)
    print(" "*25 + "Probabilistic Modeling - 概率建模")
    print("="*80)
    print("实现：Python 3 with NumPy, SciPy, Matplotlib")
    print("="*80 + "\n")


def list_sections():
    """列出所有可用章节"""
    print("\n可用章节：")
    print("-" * 60)
    for name, info in SECTIONS.items():
        print(f"\n{name}：{info['title']}")
        print("  主要内容：")
        for topic in info['topics']:
            print(f"    • {topic}")
    print("\n" + "-" * 60)
    print(f"共{len(SECTIONS)}个章节")


def load_config(overrides: Optional[List[str]] = None) -> DictConfig:
    """
    读取 configs/config.yaml 并应用覆盖项

    Args:
        overrides: Hydra风格的覆盖项，如 ["visualization.show_plots=false"]

    Returns:
        组合后的配置
    """
    with initialize_config_dir(version_base=None, config_dir=str(CONFIG_DIR)):
        return compose(config_name="config", overrides=overrides or [])


def run_one(name: str, cfg: DictConfig) -> bool:
    """运行指定章节，出错时打印堆栈并返回False"""
    print("\n" + "="*80)
    print(f"{name}：{SECTIONS[name]['title']}")
    print("="*80)
    print("主要内容：" + ", ".join(SECTIONS[name]['topics']))
    print("="*80)

    try:
        run_section(name, cfg)
        print(f"\n{name}运行完成！")
        return True
    except Exception as e:
        print(f"\n运行{name}时出错：{e}")
        traceback.print_exc()
        return False


def run_sections(names: List[str], cfg: DictConfig, pause: bool = False) -> List[str]:
    """
    依次运行多个章节

    Returns:
        运行失败的章节列表
    """
    successful = []
    failed = []

    for idx, name in enumerate(names):
        np.random.seed(cfg.general.seed)
        if run_one(name, cfg):
            successful.append(name)
        else:
            failed.append(name)

        if pause and idx < len(names) - 1:
            input("\n按Enter继续下一章...")

    print("\n" + "="*80)
    print("运行总结")
    print("="*80)
    print(f"成功运行：{len(successful)}个 - {successful}")
    if failed:
        print(f"运行失败：{len(failed)}个 - {failed}")
    print("="*80)
    return failed


def main(argv: Optional[List[str]] = None) -> int:
    """主函数"""
    parser = argparse.ArgumentParser(
        description='概率建模教学代码演示',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--section', '-s',
        default='all',
        help=f"运行指定章节 (all, {', '.join(SECTIONS)})"
    )

    parser.add_argument(
        '--list', '-l',
        action='store_true',
        help='列出所有可用章节'
    )

    parser.add_argument(
        '--no-plots',
        action='store_true',
        help='不显示图形'
    )

    parser.add_argument(
        '--pause',
        action='store_true',
        help='章节之间暂停'
    )

    args = parser.parse_args(argv)

    print_header()
    if args.list:
        list_sections()
        return 0

    overrides = []
    if args.no_plots:
        overrides.append("visualization.show_plots=false")
    cfg = load_config(overrides)

    failed = run_sections(resolve_sections(args.section), cfg, pause=args.pause)
    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
