"""
结果输出与可视化

把数值搜索得到的估计与解析解并排打印，
并可选地画出似然曲线、标出两个估计的位置。
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Dict, Any, Optional
import warnings
warnings.filterwarnings('ignore')

from .likelihood import Likelihood


def print_section_header(title: str, width: int = 80, char: str = "=") -> None:
    """打印分节标题"""
    print("\n" + char * width)
    print(title)
    print(char * width)


def format_estimate_report(name: str, result: Dict[str, Any],
                           precision: int = 4) -> str:
    """
    格式化估计结果

    Args:
        name: 参数名称，如 "μ" 或 "λ"
        result: estimate_mle返回的结果字典
        precision: 小数位数

    Returns:
        多行文本
    """
    optimization = result['optimization']
    status = "收敛" if optimization['converged'] else "未收敛"
    lines = [
        f"  数值估计 {name}_ML = {result['estimate']:.{precision}f}",
        f"  解析解   {name}_ML = {result['closed_form']:.{precision}f}",
        f"  绝对误差: {result['abs_error']:.2e}",
        f"  目标函数: {result['objective']} = {optimization['fun']:.{precision}f}",
        f"  搜索方法: {optimization['method']} "
        f"({optimization['n_iter']}次迭代, {optimization['n_evals']}次求值, {status})",
    ]
    return "\n".join(lines)


def print_estimate_report(name: str, result: Dict[str, Any],
                          precision: int = 4) -> None:
    """打印估计结果"""
    print(format_estimate_report(name, result, precision))


def plot_likelihood_curve(evaluator: Likelihood, result: Dict[str, Any],
                          n_points: int = 200,
                          ax: Optional[plt.Axes] = None,
                          log_scale: bool = False) -> plt.Axes:
    """
    绘制似然曲线并标记估计值

    Args:
        evaluator: 似然函数
        result: estimate_mle返回的结果字典
        n_points: 网格点数
        ax: 绘图坐标轴，None时新建
        log_scale: 是否画对数似然

    Returns:
        坐标轴对象
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 5))

    lower, upper = evaluator.bounds
    # 对数似然在端点可能是-inf，网格避开端点
    eps = (upper - lower) * 1e-3
    thetas = np.linspace(lower + eps, upper - eps, n_points)
    values = evaluator.curve(thetas, log=log_scale)

    ax.plot(thetas, values, 'b-', linewidth=2,
            label='对数似然' if log_scale else '似然')
    ax.axvline(x=result['estimate'], color='red', linestyle='--',
               label=f"数值估计={result['estimate']:.3f}")
    ax.axvline(x=result['closed_form'], color='green', linestyle=':',
               linewidth=2, label=f"解析解={result['closed_form']:.3f}")

    ax.set_xlabel(evaluator.parameter_name)
    ax.set_ylabel('log L' if log_scale else 'L')
    ax.set_title(f'{evaluator.name}模型的似然函数')
    ax.grid(True, alpha=0.3)
    ax.legend(loc='best')
    return ax
