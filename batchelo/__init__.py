"""
batchelo: 批量ELO不动点评分
"""

__version__ = '0.1.0'
