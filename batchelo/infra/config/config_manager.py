"""
统一配置管理器
加载和解析YAML配置文件，支持环境变量解析、配置验证
"""

from pathlib import Path
from typing import Any, Dict, List, Optional
import os

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent.parent / "configs" / "default.yaml"

DEFAULT_ELO_SETTINGS: Dict[str, Any] = {
    'round_limit': 10000,
    'epsilon': 0.01,
    'init_rating': 1500.0,
    'k_factor': 10.0,
    'logistic_constant': 400.0,
    'log_interval': 1000,
}

INT_SETTINGS = ('round_limit', 'log_interval')

DEFAULT_LOGGING_SETTINGS: Dict[str, Any] = {
    'level': 'INFO',
    'log_to_file': False,
}


class ConfigManager:
    """统一配置管理器: 加载YAML配置、解析环境变量、提供配置访问接口"""

    def __init__(self, config_path: Optional[str] = None):
        if config_path is None:
            self.config_path = None
            self._config: dict = {}
            return

        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"配置文件不存在: {config_path}")

        self._config = self._load_config()

    def _load_config(self) -> dict:
        """加载配置文件"""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"配置文件格式错误: {e}")
        if not config:
            raise ValueError("配置文件为空")
        if not isinstance(config, dict):
            raise ValueError("配置文件顶层必须是映射")
        return config

    def _resolve_env_var(self, value: Any) -> Any:
        """解析环境变量格式的配置值，支持格式: env_var:VARIABLE_NAME"""
        if isinstance(value, str) and value.startswith("env_var:"):
            env_key = value[8:]  # 移除 "env_var:" 前缀
            env_value = os.getenv(env_key)
            if env_value is None:
                raise ValueError(f"环境变量 {env_key} 未设置")
            return env_value
        return value

    def get_raw_config(self) -> dict:
        """获取原始配置字典"""
        return self._config

    def get_run_name(self) -> str:
        """获取任务名称"""
        return self._config.get('run_name', 'batchelo')

    def get_scoring_settings(self) -> Dict:
        """获取评分全局设置"""
        return self._config.get('scoring_settings', {}) or {}

    def get_raw_elo_settings(self) -> Dict:
        """获取批量ELO设置（已解析环境变量、补全默认值，未做类型转换）"""
        configured = self.get_scoring_settings().get('batch_elo', {}) or {}
        settings = dict(DEFAULT_ELO_SETTINGS)
        for key, value in configured.items():
            settings[key] = self._resolve_env_var(value)
        return settings

    def get_elo_settings(self) -> Dict[str, Any]:
        """获取批量ELO设置（类型已转换）"""
        settings = self.get_raw_elo_settings()
        for key in DEFAULT_ELO_SETTINGS:
            try:
                if key in INT_SETTINGS:
                    settings[key] = int(settings[key])
                else:
                    settings[key] = float(settings[key])
            except (TypeError, ValueError):
                raise ValueError(f"配置项 {key} 不是合法数值: {settings[key]!r}")
        return settings

    def get_logging_settings(self) -> Dict[str, Any]:
        """获取日志配置"""
        configured = self._config.get('logging', {}) or {}
        settings = dict(DEFAULT_LOGGING_SETTINGS)
        for key, value in configured.items():
            settings[key] = self._resolve_env_var(value)
        if isinstance(settings['log_to_file'], str):
            settings['log_to_file'] = settings['log_to_file'].strip().lower() in ('1', 'true', 'yes')
        return settings

    def validate_config(self) -> List[str]:
        """验证配置文件的完整性和有效性"""
        errors = []

        try:
            settings = self.get_elo_settings()
        except ValueError as e:
            return [str(e)]

        unknown = set(self.get_raw_elo_settings()) - set(DEFAULT_ELO_SETTINGS)
        for key in sorted(unknown):
            errors.append(f"未知的批量ELO配置项: {key}")

        if settings['round_limit'] <= 0:
            errors.append("round_limit 必须为正整数")
        if settings['epsilon'] < 0:
            errors.append("epsilon 不能为负数")
        if settings['k_factor'] <= 0:
            errors.append("k_factor 必须为正数")
        if settings['logistic_constant'] <= 0:
            errors.append("logistic_constant 必须为正数")
        if settings['log_interval'] < 0:
            errors.append("log_interval 不能为负数")

        level = str(self.get_logging_settings().get('level', 'INFO')).upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            errors.append(f"不支持的日志级别: {level}")

        return errors
