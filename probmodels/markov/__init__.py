"""
Section: Markov Chains (马尔可夫链)
==================================

本节讨论有限状态马尔可夫链的长期行为。

主要内容：
1. 转移矩阵与n步分布
2. 平稳分布
   - 特征分解
   - 幂迭代
   - 模拟轨迹的经验频率
3. 可约链与周期链：平稳分布何时唯一、何时能收敛到
"""

from omegaconf import DictConfig

from .stationary import (
    WEATHER_STATES,
    WEATHER_TRANSITIONS,
    MarkovChain,
    demonstrate_stationary_distribution,
    demonstrate_special_chains
)

from ..mle.reporting import print_section_header


def run_markov(cfg: DictConfig) -> None:
    """
    运行本节的所有演示代码

    Args:
        cfg: Hydra配置对象
    """
    markov_cfg = cfg.section.markov

    print_section_header("马尔可夫链 (Markov Chains)")

    demonstrate_stationary_distribution(
        transition_matrix=[list(row) for row in markov_cfg.transition_matrix],
        states=list(markov_cfg.states),
        n_steps=markov_cfg.n_steps,
        n_simulation=markov_cfg.n_simulation,
        random_state=cfg.general.seed,
        show_plot=cfg.visualization.show_plots
    )

    # 两状态链有闭式解 π = (b, a) / (a + b)
    print("\n" + "-"*60)
    print("两状态链的闭式解")
    print("-"*60)
    a, b = markov_cfg.two_state.a, markov_cfg.two_state.b
    chain = MarkovChain([[1 - a, a], [b, 1 - b]])
    pi = chain.stationary_distribution()
    print(f"P = [[1-a, a], [b, 1-b]]，a = {a}, b = {b}")
    print(f"特征分解: π = {pi}")
    print(f"闭式解:   π = {[b / (a + b), a / (a + b)]}")

    # 可约链与周期链
    print("\n" + "-"*60)
    print("平稳分布何时唯一、何时能收敛到")
    print("-"*60)
    demonstrate_special_chains()

    print("\n" + "="*80)
    print("马尔可夫链演示完成！")
    print("="*80)
    print("\n关键要点：")
    print("1. 平稳分布是Pᵀ对应特征值1的特征向量")
    print("2. 不可约、非周期的链从任意初始分布都收敛到平稳分布")
