import argparse
import sys
from typing import List, Optional

from batchelo.core.competition import load_competition, read_competition
from batchelo.core.rank import build_ranking, format_ranking
from batchelo.infra.config import DEFAULT_CONFIG_PATH, ConfigManager
from batchelo.infra.scoring import ConvergenceFailure, InvalidGameError, ScoringOrchestrator
from batchelo.utils.env_loader import load_project_env
from batchelo.utils.logger import configure_root_logger, get_logger

logger = get_logger(__name__)

EXIT_NOT_CONVERGED = 1
EXIT_BAD_INPUT = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="批量ELO评分: 从比赛结果计算不动点评分")
    parser.add_argument('--config', type=str, default=str(DEFAULT_CONFIG_PATH), help='YAML配置文件路径，缺省使用内置默认配置')
    parser.add_argument('--input', type=str, default=None, help='比赛数据文件路径，缺省时从标准输入读取')
    parser.add_argument('--log-level', type=str, default=None, help='日志级别，覆盖配置文件中的设置')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    load_project_env()

    try:
        config_manager = ConfigManager(args.config)
        validation_errors = config_manager.validate_config()
    except (FileNotFoundError, ValueError) as e:
        configure_root_logger(level=args.log_level or 'INFO')
        logger.error(f"配置加载失败: {e}")
        return EXIT_BAD_INPUT

    logging_settings = config_manager.get_logging_settings()
    configure_root_logger(
        level=args.log_level or str(logging_settings['level']),
        log_to_file=logging_settings['log_to_file'],
    )

    if validation_errors:
        logger.error("配置验证失败，发现以下问题：")
        for error in validation_errors:
            logger.error(f"  - {error}")
        return EXIT_BAD_INPUT

    try:
        if args.input:
            competition = load_competition(args.input)
        else:
            competition = read_competition(sys.stdin)
    except (OSError, ValueError) as e:
        logger.error(f"比赛数据读取失败: {e}")
        return EXIT_BAD_INPUT

    orchestrator = ScoringOrchestrator.from_config(config_manager)
    try:
        ratings = orchestrator.run_scoring(competition.num_competitors, competition.games)
    except InvalidGameError as e:
        logger.error(f"比赛数据非法: {e}")
        return EXIT_BAD_INPUT
    except ConvergenceFailure as e:
        logger.error(str(e))
        return EXIT_NOT_CONVERGED

    ranking = build_ranking(competition.competitors, ratings)
    for line in format_ranking(ranking):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
