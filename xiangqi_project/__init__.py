"""
中国象棋引擎 (Xiangqi Engine)

中国象棋规则引擎与博弈树搜索，提供走法合法性判定、将军检测、
终局判定以及基于 alpha-beta 剪枝的极小极大搜索。
"""

__version__ = "0.1.0"
__author__ = "Xiangqi Engine Team"
__description__ = "中国象棋规则引擎与 alpha-beta 搜索"

# 导入主要模块
from xiangqi_project.src import xiangqi_engine

__all__ = [
    "xiangqi_engine",
    "__version__",
    "__author__",
    "__description__",
]
