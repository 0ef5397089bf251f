"""
ConfigManager单元测试
"""

import os
import tempfile
import pytest
from pathlib import Path
import yaml

from batchelo.infra.config.config_manager import ConfigManager, DEFAULT_CONFIG_PATH, DEFAULT_ELO_SETTINGS
from batchelo.infra.scoring import ScoringOrchestrator


@pytest.fixture
def sample_config():
    """创建示例配置"""
    return {
        'run_name': 'test_run',
        'scoring_settings': {
            'batch_elo': {
                'round_limit': 500,
                'epsilon': 0.05,
                'init_rating': 1200,
                'k_factor': 16,
                'logistic_constant': 400,
                'log_interval': 100,
            }
        },
        'logging': {
            'level': 'DEBUG',
            'log_to_file': False,
        }
    }


@pytest.fixture
def config_file(sample_config):
    """创建临时配置文件"""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False, encoding='utf-8') as f:
        yaml.dump(sample_config, f, allow_unicode=True)
        temp_path = f.name

    yield temp_path

    if os.path.exists(temp_path):
        os.unlink(temp_path)


def write_config(content: str) -> str:
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False, encoding='utf-8') as f:
        f.write(content)
        return f.name


def test_config_manager_initialization(config_file):
    """测试配置管理器初始化"""
    manager = ConfigManager(config_file)

    assert manager.config_path == Path(config_file)
    assert manager.get_run_name() == 'test_run'


def test_config_file_not_found():
    """测试配置文件不存在"""
    with pytest.raises(FileNotFoundError):
        ConfigManager('/nonexistent/config.yaml')


def test_empty_config_file():
    """测试空配置文件"""
    path = write_config('')
    try:
        with pytest.raises(ValueError, match="配置文件为空"):
            ConfigManager(path)
    finally:
        os.unlink(path)


def test_invalid_yaml():
    """测试YAML格式错误"""
    path = write_config('scoring_settings: [unclosed\n')
    try:
        with pytest.raises(ValueError, match="配置文件格式错误"):
            ConfigManager(path)
    finally:
        os.unlink(path)


def test_defaults_without_config_file():
    """测试不提供配置文件时使用默认值"""
    manager = ConfigManager()

    settings = manager.get_elo_settings()
    assert settings == {
        'round_limit': 10000,
        'epsilon': 0.01,
        'init_rating': 1500.0,
        'k_factor': 10.0,
        'logistic_constant': 400.0,
        'log_interval': 1000,
    }
    assert manager.get_run_name() == 'batchelo'
    assert manager.validate_config() == []


def test_get_elo_settings(config_file):
    """测试获取批量ELO设置"""
    manager = ConfigManager(config_file)

    settings = manager.get_elo_settings()
    assert settings['round_limit'] == 500
    assert isinstance(settings['round_limit'], int)
    assert settings['epsilon'] == 0.05
    assert settings['init_rating'] == 1200.0
    assert isinstance(settings['init_rating'], float)
    assert settings['k_factor'] == 16.0


def test_partial_settings_fall_back_to_defaults():
    """测试未配置的项使用默认值"""
    path = write_config('scoring_settings:\n  batch_elo:\n    epsilon: 0.1\n')
    try:
        settings = ConfigManager(path).get_elo_settings()
    finally:
        os.unlink(path)

    assert settings['epsilon'] == 0.1
    assert settings['round_limit'] == DEFAULT_ELO_SETTINGS['round_limit']
    assert settings['k_factor'] == DEFAULT_ELO_SETTINGS['k_factor']


def test_env_var_resolution(monkeypatch):
    """测试环境变量解析"""
    monkeypatch.setenv('TEST_ROUND_LIMIT', '250')
    path = write_config('scoring_settings:\n  batch_elo:\n    round_limit: env_var:TEST_ROUND_LIMIT\n')
    try:
        settings = ConfigManager(path).get_elo_settings()
    finally:
        os.unlink(path)

    assert settings['round_limit'] == 250


def test_env_var_not_set(monkeypatch):
    """测试环境变量未设置"""
    monkeypatch.delenv('MISSING_EPSILON', raising=False)
    path = write_config('scoring_settings:\n  batch_elo:\n    epsilon: env_var:MISSING_EPSILON\n')
    try:
        manager = ConfigManager(path)
        with pytest.raises(ValueError, match="环境变量 MISSING_EPSILON 未设置"):
            manager.get_elo_settings()
    finally:
        os.unlink(path)


def test_non_numeric_setting():
    """测试非数值配置"""
    path = write_config('scoring_settings:\n  batch_elo:\n    k_factor: fast\n')
    try:
        manager = ConfigManager(path)
        with pytest.raises(ValueError, match="k_factor"):
            manager.get_elo_settings()
        assert manager.validate_config() == ["配置项 k_factor 不是合法数值: 'fast'"]
    finally:
        os.unlink(path)


def test_get_logging_settings(config_file):
    """测试日志配置"""
    manager = ConfigManager(config_file)

    assert manager.get_logging_settings() == {'level': 'DEBUG', 'log_to_file': False}


def test_validate_config(config_file):
    """测试配置验证"""
    manager = ConfigManager(config_file)

    assert manager.validate_config() == []


def test_validate_config_errors():
    """测试配置验证发现的问题"""
    path = write_config(
        'scoring_settings:\n'
        '  batch_elo:\n'
        '    round_limit: 0\n'
        '    epsilon: -0.5\n'
        '    k_factor: 0\n'
        '    logistic_constant: -400\n'
        '    max_rounds: 3\n'
        'logging:\n'
        '  level: LOUD\n'
    )
    try:
        errors = ConfigManager(path).validate_config()
    finally:
        os.unlink(path)

    assert "round_limit 必须为正整数" in errors
    assert "epsilon 不能为负数" in errors
    assert "k_factor 必须为正数" in errors
    assert "logistic_constant 必须为正数" in errors
    assert "未知的批量ELO配置项: max_rounds" in errors
    assert "不支持的日志级别: LOUD" in errors


def test_orchestrator_from_config(config_file):
    """测试根据配置构建评分编排器"""
    orchestrator = ScoringOrchestrator.from_config(ConfigManager(config_file))

    assert orchestrator.round_limit == 500
    assert orchestrator.log_interval == 100
    assert orchestrator.convergence_detector.threshold == 0.05
    assert orchestrator.rating_algorithm.get_initial_rating() == 1200.0
    assert orchestrator.rating_algorithm.k_factor == 16.0

    ratings = orchestrator.run_scoring(3, [])
    assert ratings.tolist() == [1200.0, 1200.0, 1200.0]


def test_bundled_default_config():
    """测试内置默认配置与默认值一致"""
    manager = ConfigManager(str(DEFAULT_CONFIG_PATH))

    assert manager.get_elo_settings() == DEFAULT_ELO_SETTINGS
    assert manager.get_logging_settings() == {'level': 'INFO', 'log_to_file': False}
    assert manager.validate_config() == []
