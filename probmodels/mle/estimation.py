"""
最大似然估计 (Maximum Likelihood Estimation)
============================================

最大似然原则：选择使观测数据出现概率最大的参数
θ_ML = argmax_θ L(θ) = argmax_θ Σ log p(xᵢ|θ)

对二项和泊松模型，令导数为0就能得到闭式解。
这里故意不用闭式解，而是把似然函数交给一个通用的有界一维优化器，
再把数值结果和解析解放在一起对比：
1. 验证推导是否正确
2. 说明没有闭式解时也可以这样做

三种等价的目标函数：
- 最大化似然 L(θ)
- 最大化对数似然 log L(θ)
- 最小化负对数似然 -log L(θ)
log单调递增，三者的最优点相同。
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Dict, Any, List, Optional, Sequence, Tuple
import warnings
warnings.filterwarnings('ignore')

from ..errors import InvalidInputError
from .likelihood import Likelihood, BinomialLikelihood, PoissonLikelihood
from .optimizer import BoundedOptimizer
from .reporting import print_estimate_report, plot_likelihood_curve


COIN_TOSSES = [0, 1, 0, 0, 0, 1, 1, 0, 1, 0, 0, 1, 0, 0, 1]
COLONY_COUNTS = [1, 2, 4, 5, 7, 2, 3, 5, 6, 3, 7, 2]

OBJECTIVES = {
    'likelihood': 'maximize',
    'log_likelihood': 'maximize',
    'negative_log_likelihood': 'minimize'
}


def estimate_mle(evaluator: Likelihood,
                 optimizer: Optional[BoundedOptimizer] = None,
                 objective: str = 'log_likelihood',
                 bounds: Optional[Tuple[float, float]] = None) -> Dict[str, Any]:
    """
    用有界一维搜索求最大似然估计

    Args:
        evaluator: 似然函数
        optimizer: 优化器，None时使用默认的Brent方法
        objective: 'likelihood', 'log_likelihood' 或 'negative_log_likelihood'
        bounds: 搜索区间，None时使用参数的定义域

    Returns:
        结果字典：estimate, closed_form, abs_error, objective, optimization
    """
    if objective not in OBJECTIVES:
        raise InvalidInputError(f"未知的目标函数: {objective}，可选{tuple(OBJECTIVES)}")
    if optimizer is None:
        optimizer = BoundedOptimizer()
    if bounds is None:
        bounds = evaluator.bounds

    optimization = optimizer.optimize(
        getattr(evaluator, objective), bounds, mode=OBJECTIVES[objective]
    )
    estimate = optimization['x']
    closed_form = evaluator.closed_form_mle()

    return {
        'estimate': estimate,
        'closed_form': closed_form,
        'abs_error': abs(estimate - closed_form),
        'objective': objective,
        'optimization': optimization
    }


def demonstrate_binomial_mle(tosses: Sequence[int] = COIN_TOSSES,
                             method: str = 'brent',
                             xtol: float = 1e-8,
                             show_plot: bool = True) -> Dict[str, Any]:
    """
    演示二项模型（抛硬币）的最大似然估计

    Args:
        tosses: 抛硬币结果，1为正面
        method: 优化方法
        xtol: 收敛容差
        show_plot: 是否显示图形

    Returns:
        estimate_mle的结果字典
    """
    print("\n二项模型的最大似然估计")
    print("=" * 60)
    evaluator = BinomialLikelihood(tosses)
    n, k = evaluator.n_trials, evaluator.n_successes
    print(f"抛硬币结果: {evaluator.observations.tolist()}")
    print(f"n = {n}次抛掷，k = {k}次正面")
    print("似然: L(μ) = μ^k (1-μ)^(n-k)，解析解 μ_ML = k/n")
    print("-" * 60)

    optimizer = BoundedOptimizer(method=method, xtol=xtol)
    # 单次抛掷序列的似然不会下溢，直接最大化似然本身
    result = estimate_mle(evaluator, optimizer, objective='likelihood')
    print_estimate_report("μ", result)
    print(f"  二项似然 P(k={k}|n={n}, μ_ML) = "
          f"{evaluator.aggregated_likelihood(result['estimate']):.4f}")

    if show_plot:
        fig, axes = plt.subplots(1, 2, figsize=(14, 5))
        plot_likelihood_curve(evaluator, result, ax=axes[0])
        plot_likelihood_curve(evaluator, result, ax=axes[1], log_scale=True)
        plt.suptitle(f'抛硬币：n={n}, k={k}', fontsize=14)
        plt.tight_layout()
        plt.show()

    return result


def demonstrate_poisson_mle(colonies: Sequence[int] = COLONY_COUNTS,
                            upper: float = 20.0,
                            method: str = 'brent',
                            xtol: float = 1e-8,
                            show_plot: bool = True) -> Dict[str, Any]:
    """
    演示泊松模型（菌落计数）的最大似然估计

    多个观测的似然是很多小概率的连乘，
    因此对负对数似然做最小化。

    Args:
        colonies: 每个培养皿的菌落数
        upper: λ的搜索上界
        method: 优化方法
        xtol: 收敛容差
        show_plot: 是否显示图形

    Returns:
        estimate_mle的结果字典
    """
    print("\n泊松模型的最大似然估计")
    print("=" * 60)
    evaluator = PoissonLikelihood(colonies, upper=upper)
    print(f"菌落计数: {evaluator.observations.tolist()}")
    print(f"搜索区间: λ ∈ [0, {upper}]")
    print("对数似然: log L(λ) = Σxᵢ log λ - nλ - Σ log xᵢ!，解析解 λ_ML = x̄")
    print("-" * 60)

    optimizer = BoundedOptimizer(method=method, xtol=xtol)
    result = estimate_mle(evaluator, optimizer,
                          objective='negative_log_likelihood')
    print_estimate_report("λ", result)

    if show_plot:
        fig, ax = plt.subplots(figsize=(8, 5))
        plot_likelihood_curve(evaluator, result, ax=ax, log_scale=True)
        plt.tight_layout()
        plt.show()

    return result


def demonstrate_optimizer_invariance(evaluator: Likelihood,
                                     xtol: float = 1e-8) -> List[Dict[str, Any]]:
    """
    演示目标函数与搜索方法的不变性

    最大化似然、最大化对数似然、最小化负对数似然，
    以及Brent和黄金分割两种搜索方法，应该给出同一个估计。

    Args:
        evaluator: 似然函数
        xtol: 收敛容差

    Returns:
        每种组合的结果字典列表
    """
    print(f"\n{evaluator.name}模型：目标函数与搜索方法的对比")
    print("-" * 60)
    print(f"{'方法':<8} {'目标函数':<26} {'估计值':>12} {'迭代次数':>8}")

    results = []
    for method in ('brent', 'golden'):
        optimizer = BoundedOptimizer(method=method, xtol=xtol)
        for objective in OBJECTIVES:
            result = estimate_mle(evaluator, optimizer, objective=objective)
            results.append(result)
            print(f"{method:<8} {objective:<26} {result['estimate']:>12.6f} "
                  f"{result['optimization']['n_iter']:>8}")

    estimates = [r['estimate'] for r in results]
    print(f"\n估计值的最大差异: {max(estimates) - min(estimates):.2e}")
    print(f"解析解: {evaluator.closed_form_mle():.6f}")
    return results


def demonstrate_mle_convergence(true_mu: float = 0.4,
                                sample_sizes: Sequence[int] = (10, 100, 1000, 10000),
                                random_state: Optional[int] = 42,
                                show_plot: bool = True) -> List[Dict[str, Any]]:
    """
    演示最大似然估计的一致性

    样本量增大时，μ_ML收敛到真实参数，
    误差大致按1/√n的速度减小。

    Args:
        true_mu: 真实的正面概率
        sample_sizes: 不同的样本量
        random_state: 随机种子
        show_plot: 是否显示图形

    Returns:
        每个样本量的结果字典列表
    """
    print("\n最大似然估计的一致性")
    print("=" * 60)
    print(f"真实参数: μ = {true_mu}")
    print("-" * 60)

    if random_state is not None:
        np.random.seed(random_state)
    max_n = max(sample_sizes)
    all_tosses = np.random.binomial(1, true_mu, max_n)

    results = []
    for n in sample_sizes:
        evaluator = BinomialLikelihood(all_tosses[:n])
        result = estimate_mle(evaluator, objective='negative_log_likelihood')
        result['n'] = n
        result['true_error'] = abs(result['estimate'] - true_mu)
        results.append(result)
        print(f"n = {n:>6}: μ_ML = {result['estimate']:.4f}, "
              f"|μ_ML - μ| = {result['true_error']:.4f}, "
              f"理论标准差 = {np.sqrt(true_mu * (1 - true_mu) / n):.4f}")

    if show_plot:
        fig, ax = plt.subplots(figsize=(8, 5))
        ns = [r['n'] for r in results]
        errors = [r['true_error'] for r in results]
        ax.loglog(ns, errors, 'bo-', linewidth=2, label='|μ_ML - μ|')
        ax.loglog(ns, [np.sqrt(true_mu * (1 - true_mu) / n) for n in ns],
                  'r--', label='√(μ(1-μ)/n)')
        ax.set_xlabel('样本量 n')
        ax.set_ylabel('误差')
        ax.set_title('最大似然估计的收敛')
        ax.grid(True, alpha=0.3)
        ax.legend()
        plt.tight_layout()
        plt.show()

    return results
