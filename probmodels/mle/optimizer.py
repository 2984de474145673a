"""
有界一维优化 (Bounded Scalar Optimization)
==========================================

最大似然估计归结为：在闭区间[a, b]上寻找使目标函数最大的点。
对于单峰函数，不需要导数，用区间收缩就能找到极值点。

黄金分割搜索 (Golden-Section Search)：
每一步在区间内取两个点
c = b - (b-a)/φ,  d = a + (b-a)/φ
其中φ = (1+√5)/2 是黄金分割比。
比较f(c)和f(d)，丢掉不可能包含极小值的那一段。
由于黄金分割的性质，下一步恰好可以复用一个旧点，
因此每次迭代只需要一次新的函数求值，区间按0.618的比例收缩。

Brent方法：
在黄金分割的基础上，尽可能用抛物线插值加速，
插值不可靠时退回黄金分割步。对光滑函数收敛更快。
scipy.optimize.minimize_scalar(method='bounded') 就是这个方法。

最大化与最小化：
max f(x) 等价于 min -f(x)，
所以内部统一做最小化，结果再换回调用者的符号。
"""

import numpy as np
from scipy.optimize import minimize_scalar
from typing import Callable, Dict, Any, Tuple
import warnings
warnings.filterwarnings('ignore')

from ..errors import InvalidInputError, OptimizationError


INV_PHI = (np.sqrt(5) - 1) / 2  # 1/φ ≈ 0.618

METHODS = ('brent', 'golden')
MODES = ('maximize', 'minimize')


def validate_bounds(bounds: Tuple[float, float]) -> Tuple[float, float]:
    """
    检查搜索区间

    Args:
        bounds: (lower, upper)

    Returns:
        转换为float的区间
    """
    try:
        lower, upper = bounds
        lower, upper = float(lower), float(upper)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"搜索区间必须是两个数(lower, upper)，得到{bounds!r}") from e

    if not (np.isfinite(lower) and np.isfinite(upper)):
        raise InvalidInputError(f"搜索区间必须是有限的，得到[{lower}, {upper}]")
    if lower >= upper:
        raise InvalidInputError(f"搜索区间为空：lower={lower} >= upper={upper}")
    return lower, upper


class BoundedOptimizer:
    """
    闭区间上的一维无导数优化器

    两种方法：
    - 'brent': 调用scipy的有界Brent方法
    - 'golden': 手写的黄金分割搜索，便于与库函数对照
    """

    def __init__(self, method: str = 'brent', xtol: float = 1e-8,
                 max_iter: int = 500, strict: bool = False):
        """
        初始化优化器

        Args:
            method: 搜索方法 ('brent', 'golden')
            xtol: 自变量的收敛容差
            max_iter: 最大迭代次数
            strict: 未收敛时是否抛出OptimizationError
        """
        if method not in METHODS:
            raise InvalidInputError(f"未知的优化方法: {method}，可选{METHODS}")
        if not xtol > 0:
            raise InvalidInputError(f"容差xtol必须为正数，得到{xtol}")
        if int(max_iter) != max_iter or max_iter <= 0:
            raise InvalidInputError(f"最大迭代次数必须为正整数，得到{max_iter}")

        self.method = method
        self.xtol = float(xtol)
        self.max_iter = int(max_iter)
        self.strict = strict

    def optimize(self, func: Callable[[float], float],
                 bounds: Tuple[float, float],
                 mode: str = 'maximize') -> Dict[str, Any]:
        """
        在区间上求目标函数的极值点

        Args:
            func: 单峰的标量目标函数
            bounds: 搜索区间(lower, upper)
            mode: 'maximize' 或 'minimize'

        Returns:
            结果字典：x, fun, n_iter, n_evals, converged, method, mode
        """
        if mode not in MODES:
            raise InvalidInputError(f"未知的优化模式: {mode}，可选{MODES}")
        lower, upper = validate_bounds(bounds)

        sign = -1.0 if mode == 'maximize' else 1.0
        n_evals = [0]

        def objective(x: float) -> float:
            # 统一成最小化问题，并检查函数在该点是否可求值
            try:
                value = float(func(x))
            except (ArithmeticError, TypeError, ValueError) as e:
                raise InvalidInputError(f"目标函数在x={x}处无法求值: {e}") from e
            if np.isnan(value):
                raise InvalidInputError(f"目标函数在x={x}处返回NaN")
            n_evals[0] += 1
            return sign * value

        # 端点也必须可求值，且极值可能恰好落在端点上
        f_lower = objective(lower)
        f_upper = objective(upper)

        if self.method == 'brent':
            x, fx, n_iter, converged = self._brent(objective, lower, upper)
        else:
            x, fx, n_iter, converged = self._golden(objective, lower, upper)

        for endpoint, f_endpoint in ((lower, f_lower), (upper, f_upper)):
            if f_endpoint < fx:
                x, fx = endpoint, f_endpoint

        if not converged and self.strict:
            raise OptimizationError(
                f"{self.method}搜索在{self.max_iter}次迭代内未达到容差{self.xtol}"
            )

        return {
            'x': x,
            'fun': sign * fx,
            'n_iter': n_iter,
            'n_evals': n_evals[0],
            'converged': converged,
            'method': self.method,
            'mode': mode
        }

    def _brent(self, objective: Callable[[float], float],
               lower: float, upper: float) -> Tuple[float, float, int, bool]:
        """调用scipy的有界Brent方法"""
        result = minimize_scalar(
            objective,
            bounds=(lower, upper),
            method='bounded',
            options={'xatol': self.xtol, 'maxiter': self.max_iter}
        )
        n_iter = int(result.get('nit', result.nfev))
        return float(result.x), float(result.fun), n_iter, bool(result.success)

    def _golden(self, objective: Callable[[float], float],
                lower: float, upper: float) -> Tuple[float, float, int, bool]:
        """
        黄金分割搜索

        维护区间[a, b]和两个内点c < d，
        每次丢弃函数值较大一侧的区间，复用剩下的内点。
        """
        a, b = lower, upper
        c = b - INV_PHI * (b - a)
        d = a + INV_PHI * (b - a)
        fc, fd = objective(c), objective(d)

        converged = False
        n_iter = 0
        while n_iter < self.max_iter:
            if b - a <= self.xtol:
                converged = True
                break
            n_iter += 1

            if fc < fd:
                # 极小值在[a, d]中
                b, d, fd = d, c, fc
                c = b - INV_PHI * (b - a)
                fc = objective(c)
            else:
                # 极小值在[c, b]中
                a, c, fc = c, d, fd
                d = a + INV_PHI * (b - a)
                fd = objective(d)

        if not converged and b - a <= self.xtol:
            converged = True

        x = (a + b) / 2
        return x, objective(x), n_iter, converged


def maximize_scalar(func: Callable[[float], float],
                    bounds: Tuple[float, float],
                    **kwargs) -> Dict[str, Any]:
    """在区间上最大化func，kwargs传给BoundedOptimizer"""
    return BoundedOptimizer(**kwargs).optimize(func, bounds, mode='maximize')


def minimize_scalar_bounded(func: Callable[[float], float],
                            bounds: Tuple[float, float],
                            **kwargs) -> Dict[str, Any]:
    """在区间上最小化func，kwargs传给BoundedOptimizer"""
    return BoundedOptimizer(**kwargs).optimize(func, bounds, mode='minimize')
