"""
Section: Maximum Likelihood Estimation (最大似然估计)
=====================================================

本节用两个经典例子讲解最大似然估计，
每个例子都同时给出数值搜索结果和解析推导结果。

主要内容：
1. 似然函数
   - 二项模型：抛硬币
   - 泊松模型：菌落计数
   - 似然与对数似然

2. 有界一维优化
   - 黄金分割搜索
   - Brent方法

3. 估计与对比
   - 数值解 vs 解析解
   - 不同目标函数的等价性
   - 样本量增大时的收敛
"""

from omegaconf import DictConfig

from .likelihood import (
    Likelihood,
    BinomialLikelihood,
    PoissonLikelihood,
    binomial_likelihood,
    validate_observations
)

from .optimizer import (
    BoundedOptimizer,
    maximize_scalar,
    minimize_scalar_bounded
)

from .estimation import (
    COIN_TOSSES,
    COLONY_COUNTS,
    estimate_mle,
    demonstrate_binomial_mle,
    demonstrate_poisson_mle,
    demonstrate_optimizer_invariance,
    demonstrate_mle_convergence
)

from .reporting import (
    format_estimate_report,
    print_estimate_report,
    plot_likelihood_curve,
    print_section_header
)


def run_mle(cfg: DictConfig) -> None:
    """
    运行本节的所有演示代码

    Args:
        cfg: Hydra配置对象
    """
    mle_cfg = cfg.section.mle
    show_plots = cfg.visualization.show_plots

    print_section_header("最大似然估计 (Maximum Likelihood Estimation)")

    # 二项模型
    print("\n" + "-"*60)
    print("1. 抛硬币：二项模型")
    print("-"*60)
    demonstrate_binomial_mle(
        tosses=list(mle_cfg.binomial.tosses),
        method=mle_cfg.optimizer.method,
        xtol=mle_cfg.optimizer.xtol,
        show_plot=show_plots
    )

    # 泊松模型
    print("\n" + "-"*60)
    print("2. 菌落计数：泊松模型")
    print("-"*60)
    demonstrate_poisson_mle(
        colonies=list(mle_cfg.poisson.colonies),
        upper=mle_cfg.poisson.upper,
        method=mle_cfg.optimizer.method,
        xtol=mle_cfg.optimizer.xtol,
        show_plot=show_plots
    )

    # 目标函数与搜索方法的等价性
    print("\n" + "-"*60)
    print("3. 目标函数与搜索方法的等价性")
    print("-"*60)
    demonstrate_optimizer_invariance(
        BinomialLikelihood(list(mle_cfg.binomial.tosses)),
        xtol=mle_cfg.optimizer.xtol
    )
    demonstrate_optimizer_invariance(
        PoissonLikelihood(list(mle_cfg.poisson.colonies),
                          upper=mle_cfg.poisson.upper),
        xtol=mle_cfg.optimizer.xtol
    )

    # 收敛性
    print("\n" + "-"*60)
    print("4. 样本量与估计精度")
    print("-"*60)
    demonstrate_mle_convergence(
        true_mu=mle_cfg.convergence.true_mu,
        sample_sizes=list(mle_cfg.convergence.sample_sizes),
        random_state=cfg.general.seed,
        show_plot=show_plots
    )

    print("\n" + "="*80)
    print("最大似然估计演示完成！")
    print("="*80)
    print("\n关键要点：")
    print("1. 二项模型的最大似然解是正面频率 k/n")
    print("2. 泊松模型的最大似然解是样本均值")
    print("3. 最大化似然、最大化对数似然、最小化负对数似然结果相同")
