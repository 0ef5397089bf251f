"""
评分系统基础设施
提供评分算法、批量聚合、收敛性检测和评分编排器
"""

from .rating_algorithms import (
    RatingAlgorithm,
    ELORatingAlgorithm,
)
from .batch_aggregator import (
    Game,
    GameArrays,
    batch_adjustments,
)
from .convergence_detector import ConvergenceDetector
from .scoring_orchestrator import (
    ConvergenceState,
    ScoringOrchestrator,
    compute_ratings,
)
from .errors import (
    RatingError,
    InvalidGameError,
    ConvergenceFailure,
)

__all__ = [
    # 评分算法
    'RatingAlgorithm',
    'ELORatingAlgorithm',
    # 批量聚合
    'Game',
    'GameArrays',
    'batch_adjustments',
    # 收敛性检测
    'ConvergenceDetector',
    # 评分编排器
    'ConvergenceState',
    'ScoringOrchestrator',
    'compute_ratings',
    # 异常
    'RatingError',
    'InvalidGameError',
    'ConvergenceFailure',
]
