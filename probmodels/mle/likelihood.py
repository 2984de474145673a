"""
似然函数 (Likelihood Functions)
================================

似然函数是"把数据固定、把参数当作变量"的概率：
L(θ) = P(D|θ) = Π p(xᵢ|θ)

同一个表达式，视角不同：
- 作为x的函数（θ固定）：概率质量函数，对x求和为1
- 作为θ的函数（x固定）：似然函数，对θ积分一般不为1

为什么常用对数似然？
1. 连乘变连加：log L(θ) = Σ log p(xᵢ|θ)
2. 数值稳定：很多个小于1的数连乘会下溢到0，求和不会
3. log单调递增，不改变最大值的位置

本节涵盖的模型：
1. 二项模型：抛硬币，参数μ ∈ [0,1]
   L(μ) = μ^k (1-μ)^(n-k)，最大似然解 μ_ML = k/n

2. 泊松模型：培养皿中的菌落计数，参数λ ∈ [0,∞)
   L(λ) = Π λ^xᵢ e^(-λ) / xᵢ!，最大似然解 λ_ML = x̄

实际数值搜索时，λ的定义域截断到 [0, upper]。
"""

import numpy as np
from scipy import stats
from typing import Tuple, Sequence
import warnings
warnings.filterwarnings('ignore')

from ..errors import InvalidInputError


def validate_observations(observations: Sequence,
                          binary: bool = False) -> np.ndarray:
    """
    检查并冻结观测数据

    观测集一旦载入就不应再被修改，
    因此返回的是只读的整数数组副本。

    Args:
        observations: 观测值序列（抛硬币结果或计数）
        binary: 是否要求观测值只能是0或1

    Returns:
        只读的一维整数数组
    """
    try:
        data = np.array(observations, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"观测数据无法转换为数值数组: {e}") from e

    if data.ndim != 1:
        raise InvalidInputError(f"观测数据必须是一维序列，得到{data.ndim}维")
    if data.size == 0:
        raise InvalidInputError("观测数据不能为空")
    if not np.all(np.isfinite(data)):
        raise InvalidInputError("观测数据包含NaN或无穷大")
    if np.any(data < 0):
        raise InvalidInputError("观测数据必须是非负的")
    if not np.all(data == np.floor(data)):
        raise InvalidInputError("观测数据必须是整数")
    if binary and not np.all(np.isin(data, (0, 1))):
        raise InvalidInputError("二项模型的观测值只能是0或1")

    frozen = data.astype(np.int64)
    frozen.setflags(write=False)
    return frozen


class Likelihood:
    """
    似然函数的公共接口

    子类只需要给出：
    - 单个观测的对数概率 log_pmf(θ)
    - 闭式最大似然解 closed_form_mle()

    似然、对数似然、负对数似然都由此派生。
    """

    name = "likelihood"
    parameter_name = "θ"

    def __init__(self, observations: np.ndarray,
                 bounds: Tuple[float, float]):
        self._observations = observations
        self._bounds = (float(bounds[0]), float(bounds[1]))

    @property
    def observations(self) -> np.ndarray:
        """只读的观测数据"""
        return self._observations

    @property
    def bounds(self) -> Tuple[float, float]:
        """参数的可取区间 [lower, upper]"""
        return self._bounds

    def check_parameter(self, theta: float) -> float:
        """
        检查候选参数是否在定义域内

        Args:
            theta: 候选参数

        Returns:
            转换为float的参数
        """
        try:
            if np.ndim(theta) != 0:
                raise TypeError("不是标量")
            theta = float(theta)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"参数{self.parameter_name}必须是标量数值，得到{theta!r}") from e
        lower, upper = self._bounds
        if not np.isfinite(theta) or not lower <= theta <= upper:
            raise InvalidInputError(
                f"参数{self.parameter_name}必须在[{lower}, {upper}]之间，得到{theta}"
            )
        return theta

    def log_pmf(self, theta: float) -> np.ndarray:
        """每个观测的对数概率 log p(xᵢ|θ)"""
        raise NotImplementedError

    def pmf(self, theta: float) -> np.ndarray:
        """每个观测的概率 p(xᵢ|θ)"""
        return np.exp(self.log_pmf(theta))

    def likelihood(self, theta: float) -> float:
        """
        似然 L(θ) = Π p(xᵢ|θ)

        观测很多时会下溢到0，这时应改用log_likelihood。
        """
        theta = self.check_parameter(theta)
        return float(np.prod(self.pmf(theta)))

    def log_likelihood(self, theta: float) -> float:
        """
        对数似然 log L(θ) = Σ log p(xᵢ|θ)

        当某个观测在θ下概率为0时（如μ=0却观测到正面），返回-inf。
        """
        theta = self.check_parameter(theta)
        return float(np.sum(self.log_pmf(theta)))

    def negative_log_likelihood(self, theta: float) -> float:
        """负对数似然，最小化它等价于最大化似然"""
        return -self.log_likelihood(theta)

    def closed_form_mle(self) -> float:
        """解析推导出的最大似然解"""
        raise NotImplementedError

    def curve(self, thetas: Sequence[float], log: bool = False) -> np.ndarray:
        """
        在一组参数上计算似然曲线（用于绘图）

        Args:
            thetas: 参数网格
            log: 是否返回对数似然

        Returns:
            与thetas等长的数组
        """
        evaluate = self.log_likelihood if log else self.likelihood
        return np.array([evaluate(theta) for theta in thetas])


class BinomialLikelihood(Likelihood):
    """
    二项模型（抛硬币）的似然

    每次抛掷x ∈ {0, 1}服从伯努利分布：
    p(x|μ) = μ^x (1-μ)^(1-x)

    n次独立抛掷、k次正面的似然：
    L(μ) = μ^k (1-μ)^(n-k)

    对μ求导并令其为0：
    k/μ - (n-k)/(1-μ) = 0  =>  μ_ML = k/n

    注意：以成功次数k为观测的二项分布
    P(k|n,μ) = C(n,k) μ^k (1-μ)^(n-k)
    只多了与μ无关的常数C(n,k)，最大值位置相同。
    """

    name = "binomial"
    parameter_name = "μ"

    def __init__(self, observations: Sequence[int]):
        """
        Args:
            observations: 抛硬币结果序列，1表示正面，0表示反面
        """
        super().__init__(validate_observations(observations, binary=True),
                         bounds=(0.0, 1.0))

    @property
    def n_trials(self) -> int:
        """抛掷次数n"""
        return int(self._observations.size)

    @property
    def n_successes(self) -> int:
        """正面次数k"""
        return int(self._observations.sum())

    def log_pmf(self, theta: float) -> np.ndarray:
        return stats.bernoulli.logpmf(self._observations, theta)

    def closed_form_mle(self) -> float:
        """μ_ML = k/n，即正面出现的频率"""
        return self.n_successes / self.n_trials

    def aggregated_likelihood(self, theta: float) -> float:
        """以计数(k, n)表示的二项似然 C(n,k) μ^k (1-μ)^(n-k)"""
        theta = self.check_parameter(theta)
        return binomial_likelihood(self.n_successes, self.n_trials, theta)


class PoissonLikelihood(Likelihood):
    """
    泊松模型（菌落计数）的似然

    每个培养皿的菌落数x ∈ {0, 1, 2, ...}：
    p(x|λ) = λ^x e^(-λ) / x!

    对数似然：
    log L(λ) = Σxᵢ log λ - nλ - Σ log xᵢ!

    对λ求导并令其为0：
    Σxᵢ/λ - n = 0  =>  λ_ML = x̄

    λ的定义域[0,∞)在数值搜索时截断到[0, upper]。
    """

    name = "poisson"
    parameter_name = "λ"

    def __init__(self, observations: Sequence[int], upper: float = 20.0):
        """
        Args:
            observations: 每个培养皿的菌落数
            upper: λ搜索区间的上界
        """
        if np.ndim(upper) != 0 or not np.isfinite(upper) or upper <= 0:
            raise InvalidInputError(f"上界upper必须是正的有限数，得到{upper}")
        super().__init__(validate_observations(observations),
                         bounds=(0.0, float(upper)))

    def log_pmf(self, theta: float) -> np.ndarray:
        return stats.poisson.logpmf(self._observations, theta)

    def closed_form_mle(self) -> float:
        """λ_ML = x̄，即样本均值"""
        return float(np.mean(self._observations))


def binomial_likelihood(k: int, n: int, mu: float) -> float:
    """
    二项分布的似然 P(k|n,μ) = C(n,k) μ^k (1-μ)^(n-k)

    Args:
        k: 成功次数
        n: 试验次数
        mu: 成功概率

    Returns:
        似然值
    """
    if n <= 0:
        raise InvalidInputError(f"试验次数n必须为正整数，得到{n}")
    if not 0 <= k <= n:
        raise InvalidInputError(f"成功次数k必须在[0, {n}]之间，得到{k}")
    if not 0 <= mu <= 1:
        raise InvalidInputError(f"概率mu必须在[0,1]之间，得到{mu}")
    return float(stats.binom.pmf(k, n, mu))
