"""
收敛性检测器
判断一轮批量调整后评分是否已达到不动点
"""

from typing import Dict, List, Sequence

import numpy as np


class ConvergenceDetector:
    """收敛性检测器: 本轮所有调整量的绝对值都不超过阈值即视为收敛"""

    def __init__(self, threshold: float = 0.01):
        self.threshold = threshold
        self.max_adjustment_history: List[float] = []
        self.is_converged = False

    def check_convergence(self, adjustments: Sequence[float]) -> bool:
        """检查是否收敛（调整量应已应用到评分上）"""
        adjustments = np.asarray(adjustments, dtype=float)
        max_adjustment = float(np.max(np.abs(adjustments))) if adjustments.size else 0.0
        self.max_adjustment_history.append(max_adjustment)

        # NaN 与任何阈值比较都为 False，不会被误判为收敛
        self.is_converged = bool(max_adjustment <= self.threshold)
        return self.is_converged

    def get_convergence_info(self) -> Dict:
        """获取收敛信息（包含收敛统计信息的字典）"""
        return {
            'total_rounds': len(self.max_adjustment_history),
            'max_adjustment': self.max_adjustment_history[-1] if self.max_adjustment_history else None,
            'threshold': self.threshold,
            'is_converged': self.is_converged,
        }

    def reset(self):
        """重置检测器状态"""
        self.max_adjustment_history = []
        self.is_converged = False
