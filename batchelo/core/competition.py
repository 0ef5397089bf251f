"""
比赛数据读取模块
从逗号分隔文本读取比赛结果，并按首次出现顺序为选手分配索引
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, TextIO, Union

from batchelo.infra.scoring import Game
from batchelo.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Competition:
    """一组比赛: 选手名称列表（下标即选手索引）与比赛列表"""
    competitors: List[str] = field(default_factory=list)
    games: List[Game] = field(default_factory=list)
    _index: Dict[str, int] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self):
        for index, name in enumerate(self.competitors):
            self._index.setdefault(name, index)

    def find_or_add(self, name: str) -> int:
        """返回选手索引，新选手追加到末尾"""
        index = self._index.get(name)
        if index is None:
            index = len(self.competitors)
            self.competitors.append(name)
            self._index[name] = index
        return index

    def add_game(self, name_a: str, name_b: str, points_a: float, points_b: float) -> Game:
        """添加一场比赛"""
        game = Game(
            index_a=self.find_or_add(name_a),
            index_b=self.find_or_add(name_b),
            points_a=points_a,
            points_b=points_b,
        )
        self.games.append(game)
        return game

    @property
    def num_competitors(self) -> int:
        return len(self.competitors)


def read_competition(stream: TextIO) -> Competition:
    """
    读取比赛数据

    每行格式: name_a,name_b,points_a,points_b
    空行和以 # 开头的行会被跳过；名称不去除空白。
    """
    competition = Competition()
    for line_no, raw_line in enumerate(stream, 1):
        line = raw_line.rstrip('\r\n')
        if not line or line.startswith('#'):
            continue

        parts = line.split(',')
        if len(parts) != 4:
            raise ValueError(f"Malformed line {line_no}: {line}")

        try:
            points_a = float(parts[2])
            points_b = float(parts[3])
        except ValueError:
            raise ValueError(f"Malformed points on line {line_no}: {line}")

        competition.add_game(parts[0], parts[1], points_a, points_b)

    logger.info(f"比赛数据读取完成: {competition.num_competitors} 名选手, {len(competition.games)} 场比赛")
    return competition


def load_competition(path: Union[str, Path]) -> Competition:
    """从文件读取比赛数据"""
    with open(path, 'r', encoding='utf-8') as f:
        return read_competition(f)
