"""
中国象棋引擎

规则引擎（走法合法性、将军、帅将照面、合法走法生成、终局判定、FEN转换）
与搜索引擎（静态评估、alpha-beta 剪枝的极小极大搜索）。
"""

__version__ = "0.1.0"
__author__ = "Xiangqi Engine Team"

# 导入核心组件
from .rules_engine import (
    Color, PieceType, Piece, GameStatus, Move, Position,
    ChessBoard, RuleEngine, BoardValidator, INITIAL_FEN,
    create_initial_board, apply_move, to_fen, from_fen,
    is_legal_move, legal_moves, legal_moves_from,
    is_in_check, generals_facing, game_status
)
from .search_algorithm import AlphaBetaSearcher, Evaluator, SearchResult, evaluate, best_move
from .game_interface import GameSession, MoveRecord
from .config import ConfigManager, SearchConfig, EvaluationConfig, SystemConfig, GameConfig
from .utils import setup_logger, get_logger, XiangqiEngineError

__all__ = [
    "__version__", "__author__",
    "Color", "PieceType", "Piece", "GameStatus", "Move", "Position",
    "ChessBoard", "RuleEngine", "BoardValidator", "INITIAL_FEN",
    "create_initial_board", "apply_move", "to_fen", "from_fen",
    "is_legal_move", "legal_moves", "legal_moves_from",
    "is_in_check", "generals_facing", "game_status",
    "AlphaBetaSearcher", "Evaluator", "SearchResult", "evaluate", "best_move",
    "GameSession", "MoveRecord",
    "ConfigManager", "SearchConfig", "EvaluationConfig", "SystemConfig", "GameConfig",
    "setup_logger", "get_logger", "XiangqiEngineError"
]
