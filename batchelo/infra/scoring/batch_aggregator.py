"""
批量聚合器
将一组"同时进行"的比赛汇总为每位选手本轮的评分调整量
"""

from dataclasses import dataclass
from typing import Iterable, Sequence, Union

import numpy as np

from .errors import InvalidGameError
from .rating_algorithms import ELORatingAlgorithm, RatingAlgorithm


@dataclass(frozen=True)
class Game:
    """单场比赛: 两位选手的索引及各自得分"""
    index_a: int
    index_b: int
    points_a: float
    points_b: float


@dataclass(frozen=True)
class GameArrays:
    """比赛列表的列式表示，整个计算过程中只构建一次"""
    index_a: np.ndarray
    index_b: np.ndarray
    points_a: np.ndarray
    points_b: np.ndarray

    @classmethod
    def from_games(cls, games: Iterable[Game]) -> 'GameArrays':
        """从比赛列表构建列式数组"""
        games = list(games)
        arrays = cls(
            index_a=np.array([g.index_a for g in games], dtype=np.intp),
            index_b=np.array([g.index_b for g in games], dtype=np.intp),
            points_a=np.array([g.points_a for g in games], dtype=float),
            points_b=np.array([g.points_b for g in games], dtype=float),
        )
        for array in (arrays.index_a, arrays.index_b, arrays.points_a, arrays.points_b):
            array.setflags(write=False)
        return arrays

    def __len__(self) -> int:
        return len(self.index_a)

    def validate_indices(self, num_competitors: int) -> None:
        """检查选手索引是否都在 [0, num_competitors) 范围内"""
        if len(self) == 0:
            return
        for indices in (self.index_a, self.index_b):
            bad = (indices < 0) | (indices >= num_competitors)
            if np.any(bad):
                position = int(np.argmax(bad))
                raise InvalidGameError(
                    f"比赛 #{position} 的选手索引 {int(indices[position])} 超出范围 [0, {num_competitors})"
                )


def batch_adjustments(
    ratings: Sequence[float],
    games: Union[Sequence[Game], GameArrays],
    algorithm: RatingAlgorithm = None
) -> np.ndarray:
    """
    计算一轮批量ELO的调整量

    所有比赛的调整量都基于同一份评分快照计算，先逐场求出双方调整量，
    再按选手索引汇总（np.add.at 对重复索引逐个累加，不会丢失贡献）。
    不参加任何比赛的选手调整量为0。传入的评分不会被修改。
    """
    if algorithm is None:
        algorithm = ELORatingAlgorithm()
    if not isinstance(games, GameArrays):
        games = GameArrays.from_games(games)

    snapshot = np.array(ratings, dtype=float)
    adjustments = np.zeros(len(snapshot))
    if len(games) == 0:
        return adjustments

    games.validate_indices(len(snapshot))

    rating_a = snapshot[games.index_a]
    rating_b = snapshot[games.index_b]
    delta_a = algorithm.compute_adjustments(rating_a, games.points_a, rating_b, games.points_b)
    delta_b = algorithm.compute_adjustments(rating_b, games.points_b, rating_a, games.points_a)

    np.add.at(adjustments, games.index_a, delta_a)
    np.add.at(adjustments, games.index_b, delta_b)
    return adjustments
