"""
配置管理模块

包含搜索配置、评估配置、系统配置和对局配置。
"""

from .config_manager import ConfigManager
from .engine_config import SearchConfig, EvaluationConfig, SystemConfig, GameConfig

__all__ = ['ConfigManager', 'SearchConfig', 'EvaluationConfig', 'SystemConfig', 'GameConfig']
