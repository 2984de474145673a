"""
异常类型

教学代码只关心一类错误：数值输入不合法。
例如空的或颠倒的搜索区间、超出定义域的参数、空的观测集、
行和不为1的转移矩阵等。

InvalidInputError 同时继承 ValueError，
所以按惯例捕获 ValueError 的代码依然有效。
"""


class ProbModelsError(Exception):
    """本包所有异常的基类"""


class InvalidInputError(ProbModelsError, ValueError):
    """数值输入不合法"""


class OptimizationError(ProbModelsError, RuntimeError):
    """迭代在上限次数内没有收敛"""
