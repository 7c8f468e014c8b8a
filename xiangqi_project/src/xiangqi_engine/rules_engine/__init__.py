"""
象棋规则引擎模块

包含棋局表示、走法合法性判定、将军检测和终局判定等核心功能。
"""

from .piece import Color, PieceType, Piece, GameStatus
from .move import Move, Position
from .chess_board import ChessBoard, INITIAL_FEN, create_initial_board, apply_move, to_fen, from_fen
from .rule_engine import (
    RuleEngine, is_legal_move, legal_moves, legal_moves_from,
    is_in_check, generals_facing, game_status
)
from .board_validator import BoardValidator

__all__ = [
    'Color', 'PieceType', 'Piece', 'GameStatus', 'Move', 'Position',
    'ChessBoard', 'INITIAL_FEN', 'RuleEngine', 'BoardValidator',
    'create_initial_board', 'apply_move', 'to_fen', 'from_fen',
    'is_legal_move', 'legal_moves', 'legal_moves_from',
    'is_in_check', 'generals_facing', 'game_status'
]
