"""
章节注册表

main.py 和 run_all_sections.py 都通过这里查找章节。
"""

from omegaconf import DictConfig
from typing import List

from .errors import InvalidInputError
from .mle import run_mle
from .markov import run_markov


SECTIONS = {
    'mle': {
        'title': '最大似然估计 (Maximum Likelihood Estimation)',
        'topics': ['似然函数', '二项模型', '泊松模型', '黄金分割搜索', 'Brent方法'],
        'runner': run_mle
    },
    'markov': {
        'title': '马尔可夫链 (Markov Chains)',
        'topics': ['转移矩阵', '平稳分布', '特征分解', '幂迭代', '模拟'],
        'runner': run_markov
    }
}


def resolve_sections(name: str) -> List[str]:
    """
    把章节名解析为要运行的章节列表

    Args:
        name: 'all' 或某个章节名

    Returns:
        章节名列表
    """
    if name == 'all':
        return list(SECTIONS)
    if name not in SECTIONS:
        raise InvalidInputError(f"章节{name}尚未实现，可选: all, {', '.join(SECTIONS)}")
    return [name]


def run_section(name: str, cfg: DictConfig) -> None:
    """运行单个章节"""
    SECTIONS[name]['runner'](cfg)
