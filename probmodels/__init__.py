"""
Probabilistic Modeling - 概率建模教学代码
Python实现包

这个包用简短、自成一体的演示代码讲解概率建模中的基础概念。
每个主题对应一个子模块：

- mle: 最大似然估计（二项分布、泊松分布）
- markov: 马尔可夫链的平稳分布

每个子模块都提供 run_<主题>(cfg) 入口，
由 main.py（Hydra）或 run_all_sections.py（argparse）调用。
"""

from .errors import InvalidInputError, OptimizationError, ProbModelsError

__version__ = "0.1.0"
__author__ = "Probabilistic Modeling Teaching Implementation"
