"""
配置管理
"""

from .config_manager import ConfigManager, DEFAULT_CONFIG_PATH, DEFAULT_ELO_SETTINGS

__all__ = [
    'DEFAULT_CONFIG_PATH',
    'ConfigManager',
    'DEFAULT_ELO_SETTINGS',
]
