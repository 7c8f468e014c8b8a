"""
对局会话管理

维护一局棋的当前局面、走子方、走法记录和对局状态，
并在轮到引擎时调用搜索器走子。
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from ..config.engine_config import GameConfig
from ..rules_engine import (
    ChessBoard, Color, GameStatus, Move, Piece, Position, RuleEngine
)
from ..search_algorithm import AlphaBetaSearcher
from ..utils.exceptions import GameStateError, InvalidMoveError
from ..utils.logger import LoggerMixin


@dataclass
class MoveRecord:
    """走法记录"""
    move: Move
    color: Color
    captured: Optional[Piece]
    board_before: ChessBoard
    fen_after: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            'move': self.move.to_coordinate_notation(),
            'color': self.color.name.lower(),
            'captured': self.captured.fen_char if self.captured else None,
            'fen_after': self.fen_after,
            'timestamp': self.timestamp.isoformat()
        }


class GameSession(LoggerMixin):
    """
    对局会话

    棋盘本身不可变，会话只替换当前棋盘引用；悔棋直接恢复上一步之前的棋盘。
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        board: Optional[ChessBoard] = None,
        turn: Color = Color.RED,
        searcher: Optional[AlphaBetaSearcher] = None,
        rule_engine: Optional[RuleEngine] = None
    ):
        """
        初始化对局会话

        Args:
            config: 对局配置
            board: 起始局面，默认为初始局面
            turn: 起始走子方
            searcher: 引擎使用的搜索器
            rule_engine: 规则引擎
        """
        self.session_id = str(uuid.uuid4())
        self.config = config or GameConfig()
        self.rule_engine = rule_engine or RuleEngine()
        self.searcher = searcher or AlphaBetaSearcher(rule_engine=self.rule_engine)

        self.board = board if board is not None else ChessBoard.initial()
        self.turn = Color(turn)
        self.engine_color = Color.RED if self.config.engine_color == 'red' else Color.BLACK
        self.move_history: List[MoveRecord] = []
        self.created_at = datetime.now()

        self.status = self.rule_engine.get_game_status(self.board, self.turn)

    @classmethod
    def from_fen(cls, fen: str, config: Optional[GameConfig] = None, **kwargs) -> 'GameSession':
        """从FEN局面创建会话，走子方取自FEN"""
        board, turn = ChessBoard.parse_fen(fen)
        return cls(config=config, board=board, turn=turn, **kwargs)

    @property
    def is_finished(self) -> bool:
        return self.status != GameStatus.PLAYING

    def legal_moves(self) -> List[Move]:
        """当前走子方的全部合法走法"""
        return self.rule_engine.generate_legal_moves(self.board, self.turn)

    def legal_moves_from(self, pos: Position) -> List[Move]:
        """选中某个己方棋子后可以走的全部走法"""
        return self.rule_engine.generate_piece_moves(self.board, Position(*pos), self.turn)

    def is_in_check(self) -> bool:
        return self.rule_engine.is_in_check(self.board, self.turn)

    def play_move(self, move: Union[Move, str]) -> MoveRecord:
        """
        执行走法

        Args:
            move: 走法（Move对象或坐标记法字符串）

        Returns:
            MoveRecord: 走法记录

        Raises:
            GameStateError: 对局已结束
            InvalidMoveError: 走法不合法
        """
        if self.is_finished:
            raise GameStateError(self.status.value, "对局已结束")

        if isinstance(move, str):
            move = Move.from_coordinate_notation(move)

        if move not in self.legal_moves():
            piece = self.board.get_piece_at(move.from_pos)
            if piece is None or piece.color != self.turn:
                reason = "起点没有走子方的棋子"
            else:
                reason = "不符合走法规则或会导致己方被将军"
            raise InvalidMoveError(move.to_coordinate_notation(), reason)

        captured = self.board.get_piece_at(move.to_pos)
        board_before = self.board
        self.board = self.board.make_move(move)

        record = MoveRecord(
            move=move,
            color=self.turn,
            captured=captured,
            board_before=board_before,
            fen_after=self.board.to_fen(self.turn.opponent)
        )
        self.move_history.append(record)

        self.turn = self.turn.opponent
        self._check_game_end()

        self.log_debug(f"走法执行成功: {move.to_coordinate_notation()}")
        return record

    def engine_move(self, depth: Optional[int] = None) -> Optional[MoveRecord]:
        """
        轮到引擎执子方时让引擎走一步

        Args:
            depth: 搜索深度，默认取对局配置

        Returns:
            Optional[MoveRecord]: 走法记录，无子可走时返回None

        Raises:
            GameStateError: 对局已结束或未轮到引擎
        """
        if self.is_finished:
            raise GameStateError(self.status.value, "对局已结束")
        if self.turn != self.engine_color:
            raise GameStateError(f"轮到{self.turn.name.lower()}", "未轮到引擎走棋")

        depth = self.config.ai_depth if depth is None else depth
        move = self.searcher.best_move(self.board, depth, self.turn)

        if move is None:
            self.log_warning("引擎没有可走的棋")
            self._check_game_end()
            return None

        return self.play_move(move)

    def undo(self) -> Optional[MoveRecord]:
        """
        悔棋一步

        Returns:
            Optional[MoveRecord]: 被撤销的走法记录，没有历史时返回None
        """
        if not self.move_history:
            return None

        record = self.move_history.pop()
        self.board = record.board_before
        self.turn = record.color
        self.status = self.rule_engine.get_game_status(self.board, self.turn)

        self.log_debug(f"撤销走法: {record.move.to_coordinate_notation()}")
        return record

    def to_fen(self) -> str:
        return self.board.to_fen(self.turn)

    def _check_game_end(self):
        """检查对局是否结束"""
        self.status = self.rule_engine.get_game_status(self.board, self.turn)
        if self.is_finished:
            self.log_info(f"对局结束: {self.status.value}, 共{len(self.move_history)}步")

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            'session_id': self.session_id,
            'fen': self.to_fen(),
            'turn': self.turn.name.lower(),
            'status': self.status.value,
            'in_check': self.is_in_check(),
            'move_history': [record.to_dict() for record in self.move_history],
            'created_at': self.created_at.isoformat()
        }
