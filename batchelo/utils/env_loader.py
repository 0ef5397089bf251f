"""统一的环境变量加载工具"""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from batchelo.utils.logger import get_logger

logger = get_logger(__name__)


def load_project_env(env_path: Optional[Path] = None) -> bool:
    """加载.env文件（默认当前工作目录），已存在的系统环境变量优先"""
    if env_path is None:
        env_path = Path.cwd() / ".env"

    if env_path.exists():
        load_dotenv(env_path, override=False)
        logger.info(f"已加载环境变量文件: {env_path}")
        return True

    logger.debug(f"未找到环境变量文件: {env_path}，将使用系统环境变量")
    return False
