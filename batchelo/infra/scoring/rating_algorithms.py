"""
评分算法模块
提供批量ELO的单场比赛评分调整量计算
"""

from abc import ABC, abstractmethod
from typing import Union

import numpy as np

from .errors import InvalidGameError

ArrayLike = Union[float, np.ndarray]


class RatingAlgorithm(ABC):
    """评分算法基类: 定义评分调整接口"""

    @abstractmethod
    def get_initial_rating(self) -> float:
        """获取初始评分"""
        pass

    @abstractmethod
    def get_expected_score(
        self,
        rating_a: ArrayLike,
        rating_b: ArrayLike
    ) -> ArrayLike:
        """计算期望得分"""
        pass

    @abstractmethod
    def compute_adjustments(
        self,
        team_ratings: np.ndarray,
        team_points: np.ndarray,
        opponent_ratings: np.ndarray,
        opponent_points: np.ndarray
    ) -> np.ndarray:
        """逐场计算一方的评分调整量（向量化）"""
        pass

    def compute_adjustment(
        self,
        team_rating: float,
        team_points: float,
        opponent_rating: float,
        opponent_points: float
    ) -> float:
        """计算单场比赛中一方的评分调整量"""
        adjustments = self.compute_adjustments(
            np.array([team_rating], dtype=float),
            np.array([team_points], dtype=float),
            np.array([opponent_rating], dtype=float),
            np.array([opponent_points], dtype=float),
        )
        return float(adjustments[0])


class ELORatingAlgorithm(RatingAlgorithm):
    """ELO评分算法: 得分可以是任意非负实数比分，按比分占比计算实际得分"""

    def __init__(
        self,
        init_rating: float = 1500.0,
        k_factor: float = 10.0,
        logistic_constant: float = 400.0
    ):
        self.init_rating = init_rating
        self.k_factor = k_factor
        self.logistic_constant = logistic_constant

    def get_initial_rating(self) -> float:
        """获取初始评分"""
        return self.init_rating

    def get_expected_score(
        self,
        rating_a: ArrayLike,
        rating_b: ArrayLike
    ) -> ArrayLike:
        """
        计算期望得分

        Q(r) = 10^(r / logistic_constant)
        E_a = Q(R_a) / (Q(R_a) + Q(R_b)) = 1 / (1 + 10^((R_b - R_a) / logistic_constant))
        """
        # 评分差极大时 10^x 溢出为 inf，期望得分趋于 0 即为正确极限
        with np.errstate(over='ignore'):
            exponent = np.power(10.0, (np.asarray(rating_b, dtype=float) - rating_a) / self.logistic_constant)
        expected = 1.0 / (1.0 + exponent)
        if np.ndim(expected) == 0:
            return float(expected)
        return expected

    def get_actual_score(
        self,
        points: ArrayLike,
        opponent_points: ArrayLike
    ) -> ArrayLike:
        """计算实际得分（比分占比），双方均为0分时实际得分记为0"""
        points = np.asarray(points, dtype=float)
        total = points + np.asarray(opponent_points, dtype=float)
        actual = np.divide(points, total, out=np.zeros_like(total), where=total > 0)
        if np.ndim(actual) == 0:
            return float(actual)
        return actual

    def compute_adjustments(
        self,
        team_ratings: np.ndarray,
        team_points: np.ndarray,
        opponent_ratings: np.ndarray,
        opponent_points: np.ndarray
    ) -> np.ndarray:
        """ELO调整量：K * (actual - expected)，双方均为0分的比赛调整量恒为0"""
        team_points = np.asarray(team_points, dtype=float)
        opponent_points = np.asarray(opponent_points, dtype=float)

        # NaN 也视为非法得分
        invalid = ~((team_points >= 0) & (opponent_points >= 0))
        if np.any(invalid):
            position = int(np.argmax(invalid))
            raise InvalidGameError(
                f"Points must be nonnegative, got {team_points[position]} vs {opponent_points[position]} (game #{position})"
            )

        expected = self.get_expected_score(team_ratings, opponent_ratings)
        actual = self.get_actual_score(team_points, opponent_points)
        vacuous = (team_points == 0) & (opponent_points == 0)
        return np.where(vacuous, 0.0, self.k_factor * (actual - expected))
