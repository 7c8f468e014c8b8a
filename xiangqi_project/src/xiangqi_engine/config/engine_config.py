"""
引擎配置数据结构

定义各种配置类和默认参数。
"""

from dataclasses import dataclass, field
from typing import Dict


@dataclass
class SearchConfig:
    """alpha-beta 搜索配置"""
    depth: int = 3                      # 搜索深度(层)
    mate_score: int = 100000            # 被将死时的终局分值
    capture_ordering: bool = True       # 是否按被吃棋子价值排序走法
    log_stats: bool = True              # 是否记录每次搜索的统计信息


def _default_piece_values() -> Dict[str, int]:
    return {
        'general': 10000,
        'rook': 90,
        'cannon': 45,
        'horse': 40,
        'elephant': 20,
        'advisor': 20,
        'soldier': 10,
    }


@dataclass
class EvaluationConfig:
    """局面评估配置"""
    piece_values: Dict[str, int] = field(default_factory=_default_piece_values)
    crossed_soldier_bonus: int = 20     # 过河兵加分
    central_bonus: int = 5              # 中路炮/马加分
    central_min_col: int = 3            # 中路起始列
    central_max_col: int = 5            # 中路结束列


@dataclass
class SystemConfig:
    """系统配置"""
    log_level: str = 'INFO'
    log_file: str = ''                  # 为空时只输出到控制台
    log_dir: str = 'logs/xiangqi_engine'


@dataclass
class GameConfig:
    """对局配置"""
    engine_color: str = 'black'         # 引擎执子方 ('red' 或 'black')
    ai_depth: int = 3                   # 引擎搜索深度


# 默认配置实例
DEFAULT_SEARCH_CONFIG = SearchConfig()
DEFAULT_EVALUATION_CONFIG = EvaluationConfig()
DEFAULT_SYSTEM_CONFIG = SystemConfig()
DEFAULT_GAME_CONFIG = GameConfig()
