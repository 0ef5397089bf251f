"""
评分编排器模块
从初始评分出发反复执行批量ELO，直到评分达到不动点或超过轮数上限
"""

from enum import Enum
from typing import Any, Dict, Sequence, Union

import numpy as np

from batchelo.utils.logger import get_logger

from .batch_aggregator import Game, GameArrays, batch_adjustments
from .convergence_detector import ConvergenceDetector
from .errors import ConvergenceFailure
from .rating_algorithms import ELORatingAlgorithm, RatingAlgorithm


class ConvergenceState(Enum):
    """迭代状态"""
    RUNNING = 'running'
    CONVERGED = 'converged'
    FAILED = 'failed'


class ScoringOrchestrator:
    """评分编排器: 协调评分算法、批量聚合与收敛检测，独占评分向量直到计算结束"""

    def __init__(
        self,
        rating_algorithm: RatingAlgorithm = None,
        convergence_detector: ConvergenceDetector = None,
        round_limit: int = 10000,
        log_interval: int = 1000,
        logger: Any = None
    ):
        self.rating_algorithm = rating_algorithm or ELORatingAlgorithm()
        self.convergence_detector = convergence_detector or ConvergenceDetector()
        self.round_limit = round_limit
        self.log_interval = log_interval
        self.logger = logger or get_logger(__name__)
        self.state = ConvergenceState.RUNNING

    @classmethod
    def from_config(cls, config_manager, logger: Any = None) -> 'ScoringOrchestrator':
        """根据配置管理器中的批量ELO设置构建编排器"""
        settings = config_manager.get_elo_settings()
        return cls(
            rating_algorithm=ELORatingAlgorithm(
                init_rating=settings['init_rating'],
                k_factor=settings['k_factor'],
                logistic_constant=settings['logistic_constant'],
            ),
            convergence_detector=ConvergenceDetector(threshold=settings['epsilon']),
            round_limit=settings['round_limit'],
            log_interval=settings['log_interval'],
            logger=logger,
        )

    def run_scoring(
        self,
        num_competitors: int,
        games: Union[Sequence[Game], GameArrays]
    ) -> np.ndarray:
        """
        运行批量ELO直到收敛

        每一轮: 基于当前评分计算全部调整量 -> 全部应用到评分 -> 检查收敛。
        收敛判定在调整量应用之后进行，因此返回的评分已包含最后一轮的调整。

        Returns:
            按选手索引排列的评分数组

        Raises:
            InvalidGameError: 比赛得分为负数或选手索引越界
            ConvergenceFailure: 达到轮数上限仍未收敛
        """
        if not isinstance(games, GameArrays):
            games = GameArrays.from_games(games)

        self.state = ConvergenceState.RUNNING
        self.convergence_detector.reset()
        ratings = np.full(num_competitors, self.rating_algorithm.get_initial_rating(), dtype=float)
        adjustments = np.zeros(num_competitors)

        self.logger.info(f"开始批量ELO迭代，选手数: {num_competitors}, 比赛数: {len(games)}")

        for round_idx in range(1, self.round_limit + 1):
            adjustments = batch_adjustments(ratings, games, self.rating_algorithm)
            ratings += adjustments

            if self.convergence_detector.check_convergence(adjustments):
                self.state = ConvergenceState.CONVERGED
                self.logger.info(
                    f"评分已收敛 (轮数: {round_idx}, "
                    f"最大调整量: {self.convergence_detector.get_convergence_info()['max_adjustment']:.6f})"
                )
                return ratings

            if self.log_interval and round_idx % self.log_interval == 0:
                self.logger.debug(
                    f"第 {round_idx}/{self.round_limit} 轮，"
                    f"最大调整量: {self.convergence_detector.get_convergence_info()['max_adjustment']:.6f}"
                )

        self.state = ConvergenceState.FAILED
        failure = ConvergenceFailure(
            rounds=self.round_limit,
            last_ratings=ratings,
            last_adjustments=adjustments,
        )
        self.logger.warning(
            f"达到轮数上限 {self.round_limit} 仍未收敛，最大调整量: {failure.max_adjustment:.6f}"
        )
        raise failure

    def get_convergence_info(self) -> Dict:
        """获取最近一次运行的收敛信息"""
        info = self.convergence_detector.get_convergence_info()
        info['state'] = self.state.value
        info['round_limit'] = self.round_limit
        return info


def compute_ratings(
    num_competitors: int,
    games: Sequence[Game],
    **kwargs
) -> np.ndarray:
    """以默认设置计算批量ELO评分（kwargs 透传给 ScoringOrchestrator）"""
    return ScoringOrchestrator(**kwargs).run_scoring(num_competitors, games)
