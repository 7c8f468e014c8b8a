"""
对局接口模块

包含对局会话管理和走法记录。
"""

from .game_session import GameSession, MoveRecord

__all__ = ['GameSession', 'MoveRecord']
