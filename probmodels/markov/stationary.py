"""
马尔可夫链的平稳分布 (Stationary Distributions)
===============================================

离散时间马尔可夫链由转移矩阵P描述：
P[i,j] = P(z_{t+1}=j | z_t=i)
每一行是一个概率分布，所以行和为1（行随机矩阵）。

状态分布的演化：
π_{t+1} = π_t P，于是 π_n = π_0 Pⁿ

平稳分布：满足 π = πP 的分布。
转置后写成 Pᵀπᵀ = πᵀ，
即π是Pᵀ对应特征值1的（左）特征向量，归一化使 Σπᵢ = 1。

三种求法：
1. 特征分解：求Pᵀ特征值为1的特征向量
2. 幂迭代：从任意分布出发不断乘以P，直到不再变化
3. 模拟：长时间运行马尔可夫链，统计各状态出现的频率

对于不可约、非周期的有限链，平稳分布唯一，三种方法结果一致。
- 可约链：特征值1的特征空间不止一维，平稳分布不唯一
- 周期链：幂迭代会来回振荡而不收敛
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Optional, List, Sequence, Tuple, Dict, Any
import warnings
warnings.filterwarnings('ignore')

from ..errors import InvalidInputError, OptimizationError


RANK_TOL = 1e-12  # Pᵀ - I 的奇异值低于此值视为0

WEATHER_STATES = ['晴', '多云', '雨']
WEATHER_TRANSITIONS = [
    [0.7, 0.2, 0.1],
    [0.3, 0.4, 0.3],
    [0.2, 0.3, 0.5]
]


class MarkovChain:
    """
    有限状态离散时间马尔可夫链
    """

    def __init__(self, transition_matrix: Sequence[Sequence[float]],
                 states: Optional[Sequence[Any]] = None,
                 atol: float = 1e-8):
        """
        初始化马尔可夫链

        Args:
            transition_matrix: 行随机的转移矩阵
            states: 状态名称，None时使用0..n-1
            atol: 行和检查的容差
        """
        try:
            P = np.array(transition_matrix, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"转移矩阵无法转换为数值数组: {e}") from e

        if P.ndim != 2 or P.shape[0] != P.shape[1] or P.shape[0] == 0:
            raise InvalidInputError(f"转移矩阵必须是非空方阵，得到形状{P.shape}")
        if not np.all(np.isfinite(P)):
            raise InvalidInputError("转移矩阵包含NaN或无穷大")
        if np.any(P < 0):
            raise InvalidInputError("转移概率必须是非负的")
        row_sums = P.sum(axis=1)
        if not np.allclose(row_sums, 1.0, atol=atol, rtol=0):
            raise InvalidInputError(f"转移矩阵的每一行和必须为1，得到{row_sums}")

        n_states = P.shape[0]
        if states is None:
            states = list(range(n_states))
        states = list(states)
        if len(states) != n_states:
            raise InvalidInputError(f"状态数{len(states)}与转移矩阵维度{n_states}不一致")
        if len(set(states)) != n_states:
            raise InvalidInputError("状态名称不能重复")

        P.setflags(write=False)
        self.P = P
        self.states = states
        self.n_states = n_states

    def _check_distribution(self, distribution: Sequence[float]) -> np.ndarray:
        """检查状态分布：长度匹配、非负、和为1"""
        pi = np.array(distribution, dtype=float)
        if pi.shape != (self.n_states,):
            raise InvalidInputError(f"分布的长度必须是{self.n_states}，得到形状{pi.shape}")
        if not np.all(np.isfinite(pi)) or np.any(pi < 0) or not np.isclose(pi.sum(), 1.0):
            raise InvalidInputError("分布必须非负且和为1")
        return pi

    def stationary_distribution(self) -> np.ndarray:
        """
        用特征分解求平稳分布

        取Pᵀ最接近1的特征值对应的特征向量，
        取实部后归一化。

        Returns:
            平稳分布π
        """
        # 特征值1的特征空间维数 = n - rank(Pᵀ - I)，大于1说明链可约，平稳分布不唯一
        rank = np.linalg.matrix_rank(self.P.T - np.eye(self.n_states), tol=RANK_TOL)
        if self.n_states - rank > 1:
            raise InvalidInputError("马尔可夫链可约：特征值1的特征空间不止一维，平稳分布不唯一")

        eigenvalues, eigenvectors = np.linalg.eig(self.P.T)
        idx = np.argmin(np.abs(eigenvalues - 1.0))
        v = np.real(eigenvectors[:, idx])
        pi = v / v.sum()
        # 去掉数值误差带来的微小负数
        pi = np.clip(pi, 0.0, None)
        return pi / pi.sum()

    def power_iteration(self, initial: Optional[Sequence[float]] = None,
                        tol: float = 1e-12,
                        max_iter: int = 10000) -> Tuple[np.ndarray, int]:
        """
        用幂迭代求平稳分布

        π ← πP，直到相邻两步的差的L1范数小于tol。

        Args:
            initial: 初始分布，None时使用均匀分布
            tol: 收敛容差
            max_iter: 最大迭代次数

        Returns:
            (平稳分布, 迭代次数)
        """
        if initial is None:
            pi = np.full(self.n_states, 1.0 / self.n_states)
        else:
            pi = self._check_distribution(initial)

        for n_iter in range(1, max_iter + 1):
            pi_next = pi @ self.P
            if np.abs(pi_next - pi).sum() < tol:
                return pi_next, n_iter
            pi = pi_next

        raise OptimizationError(f"幂迭代在{max_iter}次内未收敛，马尔可夫链可能是周期的")

    def n_step_distribution(self, initial: Sequence[float], n: int) -> np.ndarray:
        """
        n步之后的状态分布 π_n = π_0 Pⁿ

        Args:
            initial: 初始分布
            n: 步数

        Returns:
            n步后的分布
        """
        if n < 0:
            raise InvalidInputError(f"步数必须非负，得到{n}")
        pi = self._check_distribution(initial)
        return pi @ np.linalg.matrix_power(self.P, n)

    def simulate(self, n_steps: int, start: int = 0,
                 random_state: Optional[int] = None) -> np.ndarray:
        """
        模拟马尔可夫链的一条轨迹

        Args:
            n_steps: 转移步数
            start: 初始状态的索引
            random_state: 随机种子

        Returns:
            长度为n_steps+1的状态索引序列
        """
        if n_steps < 0:
            raise InvalidInputError(f"步数必须非负，得到{n_steps}")
        if not 0 <= start < self.n_states:
            raise InvalidInputError(f"初始状态索引必须在[0, {self.n_states})之间，得到{start}")
        if random_state is not None:
            np.random.seed(random_state)

        # 预先计算累积分布，用一个均匀随机数决定下一个状态
        cumulative = np.cumsum(self.P, axis=1)
        u = np.random.rand(n_steps)

        trajectory = np.empty(n_steps + 1, dtype=int)
        trajectory[0] = start
        state = start
        for t in range(n_steps):
            state = int(np.searchsorted(cumulative[state], u[t], side='right'))
            state = min(state, self.n_states - 1)
            trajectory[t + 1] = state
        return trajectory

    def empirical_distribution(self, trajectory: Sequence[int]) -> np.ndarray:
        """各状态在轨迹中出现的频率"""
        trajectory = np.asarray(trajectory, dtype=int)
        if trajectory.size == 0:
            raise InvalidInputError("轨迹不能为空")
        counts = np.bincount(trajectory, minlength=self.n_states)
        return counts / counts.sum()

    def is_stationary(self, distribution: Sequence[float],
                      atol: float = 1e-8) -> bool:
        """检查 πP = π 是否成立"""
        pi = self._check_distribution(distribution)
        return bool(np.allclose(pi @ self.P, pi, atol=atol))


def demonstrate_stationary_distribution(
        transition_matrix: Sequence[Sequence[float]] = WEATHER_TRANSITIONS,
        states: Sequence[Any] = WEATHER_STATES,
        n_steps: int = 20,
        n_simulation: int = 100000,
        random_state: Optional[int] = 42,
        show_plot: bool = True) -> Dict[str, Any]:
    """
    演示平稳分布的三种求法

    以天气为例：状态为晴、多云、雨，
    分别用特征分解、幂迭代、长时间模拟求平稳分布，
    并画出从不同初始状态出发的分布如何收敛。

    Args:
        transition_matrix: 转移矩阵
        states: 状态名称
        n_steps: 收敛图中的步数
        n_simulation: 模拟的步数
        random_state: 随机种子
        show_plot: 是否显示图形

    Returns:
        结果字典：eigen, power, power_iterations, empirical
        幂迭代不收敛（周期链）时 power 和 power_iterations 为None
    """
    print("\n马尔可夫链的平稳分布")
    print("=" * 60)
    chain = MarkovChain(transition_matrix, states)
    print("转移矩阵 P:")
    print(chain.P)
    print("-" * 60)

    pi_eigen = chain.stationary_distribution()
    try:
        pi_power, n_iter = chain.power_iteration()
    except OptimizationError as e:
        # 周期链的平稳分布仍然唯一，只是πPⁿ不收敛
        print(f"幂迭代不收敛: {e}")
        pi_power, n_iter = None, None
    trajectory = chain.simulate(n_simulation, random_state=random_state)
    pi_empirical = chain.empirical_distribution(trajectory)

    print(f"{'状态':<8} {'特征分解':>10} {'幂迭代':>10} {'模拟频率':>10}")
    for i, state in enumerate(chain.states):
        power_text = f"{pi_power[i]:>10.4f}" if pi_power is not None else f"{'-':>10}"
        print(f"{str(state):<8} {pi_eigen[i]:>10.4f} {power_text} "
              f"{pi_empirical[i]:>10.4f}")
    if n_iter is not None:
        print(f"\n幂迭代次数: {n_iter}")
    print(f"πP = π 成立: {chain.is_stationary(pi_eigen)}")

    if show_plot:
        fig, axes = plt.subplots(1, chain.n_states, figsize=(5 * chain.n_states, 4),
                                 squeeze=False)
        steps = np.arange(n_steps + 1)
        for start in range(chain.n_states):
            ax = axes[0, start]
            initial = np.eye(chain.n_states)[start]
            history = np.array([chain.n_step_distribution(initial, n) for n in steps])
            for i, state in enumerate(chain.states):
                line, = ax.plot(steps, history[:, i], 'o-', markersize=3,
                                label=f'P({state})')
                ax.axhline(y=pi_eigen[i], color=line.get_color(),
                           linestyle='--', alpha=0.5)
            ax.set_xlabel('步数 n')
            ax.set_ylabel('概率')
            ax.set_title(f'初始状态: {chain.states[start]}')
            ax.set_ylim([0, 1])
            ax.grid(True, alpha=0.3)
            ax.legend(loc='best')

        plt.suptitle('π₀Pⁿ 收敛到平稳分布', fontsize=14)
        plt.tight_layout()
        plt.show()

    print("\n观察：")
    print("1. 三种方法给出的平稳分布一致")
    print("2. 无论从哪个状态出发，分布都收敛到同一个平稳分布")

    return {
        'eigen': pi_eigen,
        'power': pi_power,
        'power_iterations': n_iter,
        'empirical': pi_empirical
    }


REDUCIBLE_TRANSITIONS = [
    [0.5, 0.5, 0.0, 0.0],
    [0.2, 0.8, 0.0, 0.0],
    [0.0, 0.0, 0.6, 0.4],
    [0.0, 0.0, 0.3, 0.7]
]
PERIODIC_TRANSITIONS = [
    [0.0, 1.0, 0.0],
    [0.5, 0.0, 0.5],
    [0.0, 1.0, 0.0]
]


def demonstrate_special_chains(
        reducible: Sequence[Sequence[float]] = REDUCIBLE_TRANSITIONS,
        periodic: Sequence[Sequence[float]] = PERIODIC_TRANSITIONS,
        max_iter: int = 1000) -> Dict[str, Any]:
    """
    演示平稳分布的两个反例

    1. 可约链：状态分成互不相通的两组，
       从不同组出发收敛到不同的平稳分布，特征分解拒绝给出唯一答案。
    2. 周期链：平稳分布唯一，
       但从确定状态出发时πPⁿ在两个分布之间来回振荡。

    Args:
        reducible: 可约链的转移矩阵
        periodic: 周期链的转移矩阵
        max_iter: 幂迭代的最大次数

    Returns:
        结果字典：reducible_limits, periodic_eigen, periodic_converged
    """
    print("\n可约链与周期链")
    print("=" * 60)

    chain = MarkovChain(reducible)
    print("可约链 P:")
    print(chain.P)
    try:
        chain.stationary_distribution()
    except InvalidInputError as e:
        print(f"特征分解: {e}")

    reducible_limits = []
    for start in range(chain.n_states):
        initial = np.eye(chain.n_states)[start]
        pi, _ = chain.power_iteration(initial=initial, max_iter=max_iter)
        reducible_limits.append(pi)
        print(f"  从状态{start}出发的极限分布: {pi}")

    print("-" * 60)
    chain = MarkovChain(periodic)
    print("周期链 P:")
    print(chain.P)
    pi_eigen = chain.stationary_distribution()
    print(f"特征分解: π = {pi_eigen}")
    initial = np.eye(chain.n_states)[0]
    print(f"  π₀P  = {chain.n_step_distribution(initial, 1)}")
    print(f"  π₀P² = {chain.n_step_distribution(initial, 2)}")
    try:
        chain.power_iteration(initial=initial, max_iter=max_iter)
        periodic_converged = True
    except OptimizationError as e:
        print(f"幂迭代: {e}")
        periodic_converged = False

    print("\n观察：")
    print("1. 可约链的极限分布取决于初始状态")
    print("2. 周期链的平稳分布存在且唯一，但πPⁿ本身不收敛")

    return {
        'reducible_limits': reducible_limits,
        'periodic_eigen': pi_eigen,
        'periodic_converged': periodic_converged
    }
