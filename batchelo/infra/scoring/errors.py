"""
评分异常定义
区分输入数据错误（致命）与不收敛（可诊断的算法结果）
"""

from typing import Sequence


class RatingError(Exception):
    """评分计算异常基类"""


class InvalidGameError(RatingError, ValueError):
    """比赛数据非法: 得分为负数（或NaN）、选手索引越界"""


class ConvergenceFailure(RatingError):
    """达到轮数上限仍未收敛，携带最后一轮的完整诊断信息"""

    def __init__(
        self,
        rounds: int,
        last_ratings: Sequence[float],
        last_adjustments: Sequence[float]
    ):
        self.rounds = rounds
        self.last_ratings = [float(r) for r in last_ratings]
        self.last_adjustments = [float(a) for a in last_adjustments]
        super().__init__(str(self))

    @property
    def max_adjustment(self) -> float:
        """最后一轮的最大绝对调整量"""
        if not self.last_adjustments:
            return 0.0
        return max(abs(a) for a in self.last_adjustments)

    def __str__(self) -> str:
        return (
            f"No convergence after {self.rounds} rounds.\n"
            f"Last ratings: {self.last_ratings}\n"
            f"Last adjustments: {self.last_adjustments}"
        )

    def __reduce__(self):
        return (
            self.__class__,
            (self.rounds, self.last_ratings, self.last_adjustments)
        )
