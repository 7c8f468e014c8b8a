"""
Xiangqi Engine 源代码模块

- xiangqi_engine: 象棋规则引擎与搜索引擎
"""

from . import xiangqi_engine

__all__ = [
    "xiangqi_engine",
]
