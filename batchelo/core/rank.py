"""
排名生成模块
将评分结果整理为按评分降序排列的排名表
"""

from typing import List, Sequence

import pandas as pd

RANKING_COLUMNS = ['rank', 'competitor', 'rating']


def build_ranking(competitors: Sequence[str], ratings: Sequence[float]) -> pd.DataFrame:
    """生成排名表，评分相同的选手保持首次出现顺序"""
    if len(competitors) != len(ratings):
        raise ValueError(f"选手数量({len(competitors)})与评分数量({len(ratings)})不一致")

    df = pd.DataFrame({
        'competitor': list(competitors),
        'rating': [float(r) for r in ratings],
    })
    df = df.sort_values('rating', ascending=False, kind='mergesort').reset_index(drop=True)
    df.insert(0, 'rank', range(1, len(df) + 1))
    return df[RANKING_COLUMNS]


def format_ranking(ranking: pd.DataFrame) -> List[str]:
    """格式化为 "名称: 评分" 文本行，评分向零取整"""
    return [
        f"{row.competitor}: {int(row.rating)}"
        for row in ranking.itertuples(index=False)
    ]
