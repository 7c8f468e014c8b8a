"""
配置管理器

负责加载、保存和管理各种配置。
"""

import copy
import json
import logging
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, Type, TypeVar

import yaml

from .engine_config import (
    SearchConfig, EvaluationConfig, SystemConfig, GameConfig,
    DEFAULT_SEARCH_CONFIG, DEFAULT_EVALUATION_CONFIG,
    DEFAULT_SYSTEM_CONFIG, DEFAULT_GAME_CONFIG
)
from ..utils.exceptions import ConfigurationError

T = TypeVar('T')

logger = logging.getLogger(__name__)

# 每方各类棋子的数量
PIECE_LIMITS = {
    'general': 1, 'advisor': 2, 'elephant': 2, 'horse': 2,
    'rook': 2, 'cannon': 2, 'soldier': 5,
}
PIECE_NAMES = tuple(PIECE_LIMITS)


class ConfigManager:
    """
    配置管理器

    每类配置对应配置目录下的一个YAML文件。
    """

    def __init__(self, config_dir: str = "configs/xiangqi_engine"):
        """
        初始化配置管理器

        Args:
            config_dir: 配置文件目录
        """
        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.config_files = {
            'search': self.config_dir / 'search_config.yaml',
            'evaluation': self.config_dir / 'evaluation_config.yaml',
            'system': self.config_dir / 'system_config.yaml',
            'game': self.config_dir / 'game_config.yaml'
        }

        self.default_configs = {
            'search': DEFAULT_SEARCH_CONFIG,
            'evaluation': DEFAULT_EVALUATION_CONFIG,
            'system': DEFAULT_SYSTEM_CONFIG,
            'game': DEFAULT_GAME_CONFIG
        }

        self.config_types = {
            'search': SearchConfig,
            'evaluation': EvaluationConfig,
            'system': SystemConfig,
            'game': GameConfig
        }

        self._initialize_default_configs()

    def _initialize_default_configs(self):
        """初始化默认配置文件"""
        for config_name, config_obj in self.default_configs.items():
            config_file = self.config_files[config_name]
            if not config_file.exists():
                self.save_config(config_name, config_obj)
                logger.info(f"创建默认配置文件: {config_file}")

    def _default(self, config_name: str) -> Any:
        # 返回副本，避免调用方修改全局默认值
        return copy.deepcopy(self.default_configs[config_name])

    def load_config(self, config_name: str, config_class: Type[T]) -> T:
        """
        加载配置

        文件不存在或无法解析时回退到默认配置。

        Args:
            config_name: 配置名称
            config_class: 配置类

        Returns:
            配置对象
        """
        config_file = self.config_files.get(config_name)
        if config_file is None:
            raise ConfigurationError(config_name, "未知的配置名称")
        if not config_file.exists():
            logger.warning(f"配置文件不存在: {config_file}，使用默认配置")
            return self._default(config_name)

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
            config = self._dict_to_dataclass(data, config_class)
        except (OSError, yaml.YAMLError, TypeError, AttributeError) as e:
            logger.error(f"加载配置文件失败: {config_file}, 错误: {e}")
            return self._default(config_name)

        logger.debug(f"成功加载配置: {config_file}")
        return config

    def save_config(self, config_name: str, config_obj: Any):
        """
        保存配置

        Args:
            config_name: 配置名称
            config_obj: 配置对象
        """
        config_file = self.config_files.get(config_name)
        if not config_file:
            raise ConfigurationError(config_name, "未知的配置名称")

        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.dump(asdict(config_obj), f, default_flow_style=False,
                      allow_unicode=True, indent=2)

        logger.info(f"成功保存配置: {config_file}")

    def get_search_config(self) -> SearchConfig:
        """获取搜索配置"""
        return self.load_config('search', SearchConfig)

    def get_evaluation_config(self) -> EvaluationConfig:
        """获取评估配置"""
        return self.load_config('evaluation', EvaluationConfig)

    def get_system_config(self) -> SystemConfig:
        """获取系统配置"""
        return self.load_config('system', SystemConfig)

    def get_game_config(self) -> GameConfig:
        """获取对局配置"""
        return self.load_config('game', GameConfig)

    def update_config(self, config_name: str, **kwargs):
        """
        更新配置

        Args:
            config_name: 配置名称
            **kwargs: 要更新的配置项
        """
        config_class = self.config_types[config_name]
        config = self.load_config(config_name, config_class)

        for key, value in kwargs.items():
            if hasattr(config, key):
                setattr(config, key, value)
            else:
                logger.warning(f"配置项不存在: {key}")

        self.save_config(config_name, config)

    def reset_config(self, config_name: str):
        """重置配置为默认值"""
        self.save_config(config_name, self.default_configs[config_name])
        logger.info(f"配置已重置为默认值: {config_name}")

    def validate_config(self, config_name: str) -> bool:
        """
        验证配置的有效性

        Args:
            config_name: 配置名称

        Returns:
            bool: 配置是否有效
        """
        config = self.load_config(config_name, self.config_types[config_name])
        try:
            self.check_config(config_name, config)
        except ConfigurationError as e:
            logger.error(f"配置验证失败: {e}")
            return False
        return True

    def check_config(self, config_name: str, config: Any):
        """
        检查配置对象，无效时抛出ConfigurationError
        """
        if config_name == 'search':
            if config.depth < 1:
                raise ConfigurationError(config_name, f"搜索深度必须大于0: {config.depth}")
            evaluation = self.get_evaluation_config()
            # 终局分值必须压过一方全部子力与位置加分之和
            max_material = sum(
                evaluation.piece_values.get(name, 0) * count
                for name, count in PIECE_LIMITS.items()
            )
            max_material += 5 * evaluation.crossed_soldier_bonus + 4 * evaluation.central_bonus
            if config.mate_score <= max_material:
                raise ConfigurationError(config_name, f"终局分值过小: {config.mate_score}")
        elif config_name == 'evaluation':
            missing = [name for name in PIECE_NAMES if name not in config.piece_values]
            if missing:
                raise ConfigurationError(config_name, f"缺少棋子价值: {missing}")
            if any(value <= 0 for value in config.piece_values.values()):
                raise ConfigurationError(config_name, "棋子价值必须为正数")
            if not 0 <= config.central_min_col <= config.central_max_col <= 8:
                raise ConfigurationError(config_name, "中路列范围无效")
        elif config_name == 'system':
            if config.log_level.upper() not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
                raise ConfigurationError(config_name, f"未知的日志级别: {config.log_level}")
        elif config_name == 'game':
            if config.engine_color not in ('red', 'black'):
                raise ConfigurationError(config_name, f"无效的执子方: {config.engine_color}")
            if config.ai_depth < 1:
                raise ConfigurationError(config_name, f"搜索深度必须大于0: {config.ai_depth}")

    def get_all_configs(self) -> Dict[str, Any]:
        """获取所有配置"""
        return {
            config_name: self.load_config(config_name, config_class)
            for config_name, config_class in self.config_types.items()
        }

    def export_configs(self, export_path: str):
        """
        导出所有配置到文件

        Args:
            export_path: 导出文件路径 (.yaml 或 .json)
        """
        export_data = {
            config_name: asdict(config_obj)
            for config_name, config_obj in self.get_all_configs().items()
        }

        export_file = Path(export_path)
        with open(export_file, 'w', encoding='utf-8') as f:
            if export_file.suffix in ('.yaml', '.yml'):
                yaml.dump(export_data, f, default_flow_style=False,
                          allow_unicode=True, indent=2)
            else:
                json.dump(export_data, f, ensure_ascii=False, indent=2)

        logger.info(f"配置已导出到: {export_path}")

    def _dict_to_dataclass(self, data: Dict[str, Any], dataclass_type: Type[T]) -> T:
        """将字典转换为数据类对象，忽略未知字段"""
        field_names = {f.name for f in fields(dataclass_type)}
        filtered_data = {k: v for k, v in data.items() if k in field_names}
        return dataclass_type(**filtered_data)
