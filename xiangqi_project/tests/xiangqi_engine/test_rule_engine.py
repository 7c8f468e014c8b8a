"""
测试RuleEngine类的功能

测试各棋子的走法规则、将军与照面检测、合法走法生成和终局判定。
"""

import pytest

from xiangqi_project.src.xiangqi_engine.rules_engine import (
    ChessBoard, Color, GameStatus, Move, Piece, Position, RuleEngine,
    create_initial_board, is_legal_move, legal_moves, legal_moves_from,
    is_in_check, generals_facing, game_status
)


def build_board(pieces):
    """用 {(x, y): FEN字符} 构造棋盘"""
    board = ChessBoard()
    for pos, char in pieces.items():
        board = board.with_piece(pos, Piece.from_fen_char(char))
    return board


# 黑将被双车将死
CHECKMATE_FEN = "R3k4/9/9/9/9/4R4/9/9/9/3K5 b - - 0 1"
# 黑将未被将军但无子可走
STALEMATE_FEN = "4k4/9/4P4/9/9/3R1R3/9/9/9/3K5 b - - 0 1"


class TestPieceRules:
    """各棋子走法规则的测试"""

    def setup_method(self):
        self.engine = RuleEngine()
        self.board = create_initial_board()

    def test_basic_preconditions(self):
        """起点无子、非走子方棋子、原地不动、出界、吃己方棋子都不合法"""
        assert not self.engine.is_legal_move(self.board, Move((4, 4), (4, 5)), Color.RED)
        assert not self.engine.is_legal_move(self.board, Move((0, 3), (0, 4)), Color.RED)
        assert not self.engine.is_legal_move(self.board, Move((0, 6), (0, 6)), Color.RED)
        assert not self.engine.is_legal_move(self.board, Move((0, 9), (0, 10)), Color.RED)
        assert not self.engine.is_legal_move(self.board, Move((0, 9), (1, 9)), Color.RED)

    def test_general_moves(self):
        assert self.engine.is_legal_move(self.board, Move((4, 9), (4, 8)), Color.RED)

        board = build_board({(3, 7): 'K', (4, 0): 'k'})
        assert self.engine.is_legal_move(board, Move((3, 7), (3, 8)), Color.RED)
        assert self.engine.is_legal_move(board, Move((3, 7), (4, 7)), Color.RED)
        assert not self.engine.is_legal_move(board, Move((3, 7), (2, 7)), Color.RED)  # 出九宫
        assert not self.engine.is_legal_move(board, Move((3, 7), (3, 6)), Color.RED)  # 出九宫
        assert not self.engine.is_legal_move(board, Move((3, 7), (4, 8)), Color.RED)  # 斜走
        assert not self.engine.is_legal_move(board, Move((4, 0), (4, 2)), Color.BLACK)  # 走两步

    def test_advisor_moves(self):
        assert self.engine.is_legal_move(self.board, Move((3, 9), (4, 8)), Color.RED)
        assert not self.engine.is_legal_move(self.board, Move((3, 9), (2, 8)), Color.RED)
        assert not self.engine.is_legal_move(self.board, Move((3, 9), (3, 8)), Color.RED)
        assert self.engine.is_legal_move(self.board, Move((5, 0), (4, 1)), Color.BLACK)

    def test_elephant_moves(self):
        assert self.engine.is_legal_move(self.board, Move((2, 9), (4, 7)), Color.RED)
        assert self.engine.is_legal_move(self.board, Move((2, 9), (0, 7)), Color.RED)
        assert not self.engine.is_legal_move(self.board, Move((2, 9), (3, 8)), Color.RED)

        # 塞象眼
        blocked = self.board.with_piece((3, 8), Piece.from_fen_char('P'))
        assert not self.engine.is_legal_move(blocked, Move((2, 9), (4, 7)), Color.RED)

        # 不能过河
        board = build_board({(2, 5): 'B', (2, 4): 'b'})
        assert not self.engine.is_legal_move(board, Move((2, 5), (4, 3)), Color.RED)
        assert self.engine.is_legal_move(board, Move((2, 5), (4, 7)), Color.RED)
        assert not self.engine.is_legal_move(board, Move((2, 4), (0, 6)), Color.BLACK)
        assert self.engine.is_legal_move(board, Move((2, 4), (4, 2)), Color.BLACK)

    def test_horse_moves_in_initial_position(self):
        """初始局面红马的走法"""
        assert self.engine.is_legal_move(self.board, Move((1, 9), (2, 7)), Color.RED)
        assert self.engine.is_legal_move(self.board, Move((1, 9), (0, 7)), Color.RED)
        # 横向马腿(2, 9)被相挡住
        assert not self.engine.is_legal_move(self.board, Move((1, 9), (3, 8)), Color.RED)

        moves = self.engine.generate_piece_moves(self.board, Position(1, 9), Color.RED)
        assert moves == [Move((1, 9), (0, 7)), Move((1, 9), (2, 7))]

    def test_horse_leg_blocked(self):
        blocked = self.board.with_piece((1, 8), Piece.from_fen_char('P'))
        assert not self.engine.is_legal_move(blocked, Move((1, 9), (2, 7)), Color.RED)
        assert not self.engine.is_legal_move(blocked, Move((1, 9), (0, 7)), Color.RED)

        board = build_board({(4, 4): 'N'})
        assert self.engine.is_legal_move(board, Move((4, 4), (6, 5)), Color.RED)
        board = board.with_piece((5, 4), Piece.from_fen_char('p'))
        assert not self.engine.is_legal_move(board, Move((4, 4), (6, 5)), Color.RED)
        assert not self.engine.is_legal_move(board, Move((4, 4), (6, 3)), Color.RED)
        assert self.engine.is_legal_move(board, Move((4, 4), (5, 6)), Color.RED)

    def test_rook_moves(self):
        assert self.engine.is_legal_move(self.board, Move((0, 9), (0, 7)), Color.RED)
        assert not self.engine.is_legal_move(self.board, Move((0, 9), (0, 6)), Color.RED)  # 己方兵
        assert not self.engine.is_legal_move(self.board, Move((0, 9), (0, 5)), Color.RED)  # 被阻挡
        assert not self.engine.is_legal_move(self.board, Move((0, 9), (1, 8)), Color.RED)  # 斜走

        board = build_board({(0, 5): 'R', (0, 0): 'r', (5, 5): 'p'})
        assert self.engine.is_legal_move(board, Move((0, 5), (0, 0)), Color.RED)
        assert self.engine.is_legal_move(board, Move((0, 5), (5, 5)), Color.RED)
        assert not self.engine.is_legal_move(board, Move((0, 5), (6, 5)), Color.RED)

    def test_cannon_moves_in_initial_position(self):
        """初始局面红炮的走法"""
        # 中间恰好隔着黑炮一个炮台，可以打黑马
        assert self.engine.is_legal_move(self.board, Move((1, 7), (1, 0)), Color.RED)
        # 直接吃黑炮时中间没有炮台
        assert not self.engine.is_legal_move(self.board, Move((1, 7), (1, 2)), Color.RED)
        # 不吃子时同车
        assert self.engine.is_legal_move(self.board, Move((1, 7), (4, 7)), Color.RED)
        assert self.engine.is_legal_move(self.board, Move((1, 7), (1, 3)), Color.RED)
        assert not self.engine.is_legal_move(self.board, Move((1, 7), (1, 1)), Color.RED)

    def test_cannon_screen_count(self):
        """炮吃子时必须恰好隔一个子"""
        # 加一个炮台后，打黑炮合法，打黑马变成隔两个子
        screened = self.board.with_piece((1, 5), Piece.from_fen_char('P'))
        assert self.engine.is_legal_move(screened, Move((1, 7), (1, 2)), Color.RED)
        assert not self.engine.is_legal_move(screened, Move((1, 7), (1, 0)), Color.RED)

        # 去掉黑炮后，打黑马中间没有炮台
        unscreened = self.board.with_piece((1, 2), None)
        assert not self.engine.is_legal_move(unscreened, Move((1, 7), (1, 0)), Color.RED)

    def test_soldier_before_river(self):
        assert self.engine.is_legal_move(self.board, Move((4, 6), (4, 5)), Color.RED)
        assert not self.engine.is_legal_move(self.board, Move((4, 6), (3, 6)), Color.RED)
        assert not self.engine.is_legal_move(self.board, Move((4, 6), (4, 7)), Color.RED)
        assert not self.engine.is_legal_move(self.board, Move((4, 6), (4, 4)), Color.RED)
        assert self.engine.is_legal_move(self.board, Move((4, 3), (4, 4)), Color.BLACK)
        assert not self.engine.is_legal_move(self.board, Move((4, 3), (5, 3)), Color.BLACK)

    def test_soldier_after_river(self):
        board = build_board({(4, 4): 'P', (4, 5): 'p'})
        assert self.engine.is_legal_move(board, Move((4, 4), (4, 3)), Color.RED)
        assert self.engine.is_legal_move(board, Move((4, 4), (3, 4)), Color.RED)
        assert self.engine.is_legal_move(board, Move((4, 4), (5, 4)), Color.RED)
        assert not self.engine.is_legal_move(board, Move((4, 4), (4, 5)), Color.RED)  # 后退

        assert self.engine.is_legal_move(board, Move((4, 5), (4, 6)), Color.BLACK)
        assert self.engine.is_legal_move(board, Move((4, 5), (3, 5)), Color.BLACK)
        assert not self.engine.is_legal_move(board, Move((4, 5), (4, 4)), Color.BLACK)  # 后退

    def test_count_pieces_between(self):
        assert self.engine.count_pieces_between(self.board, Position(1, 7), Position(1, 0)) == 1
        assert self.engine.count_pieces_between(self.board, Position(0, 9), Position(8, 9)) == 7
        assert self.engine.count_pieces_between(self.board, Position(0, 0), Position(1, 0)) == 0

        with pytest.raises(ValueError):
            self.engine.count_pieces_between(self.board, Position(0, 0), Position(1, 1))


class TestCheckDetection:
    """将军与照面检测的测试"""

    def setup_method(self):
        self.engine = RuleEngine()

    def test_initial_position_not_in_check(self):
        board = create_initial_board()
        assert not self.engine.is_in_check(board, Color.RED)
        assert not self.engine.is_in_check(board, Color.BLACK)
        assert not self.engine.generals_facing(board)

    def test_rook_check(self):
        board = build_board({(4, 0): 'k', (4, 5): 'R', (3, 9): 'K'})
        assert self.engine.is_in_check(board, Color.BLACK)
        assert not self.engine.is_in_check(board, Color.RED)

    def test_cannon_check_needs_screen(self):
        board = build_board({(4, 0): 'k', (4, 5): 'C', (3, 9): 'K'})
        assert not self.engine.is_in_check(board, Color.BLACK)

        board = board.with_piece((4, 3), Piece.from_fen_char('p'))
        assert self.engine.is_in_check(board, Color.BLACK)

    def test_horse_check_and_blocked_leg(self):
        board = build_board({(4, 0): 'k', (3, 2): 'N', (3, 9): 'K'})
        assert self.engine.is_in_check(board, Color.BLACK)

        board = board.with_piece((3, 1), Piece.from_fen_char('a'))
        assert not self.engine.is_in_check(board, Color.BLACK)

    def test_soldier_check(self):
        board = build_board({(4, 0): 'k', (4, 1): 'P', (3, 9): 'K'})
        assert self.engine.is_in_check(board, Color.BLACK)

    def test_missing_general_counts_as_check(self):
        board = build_board({(4, 0): 'k', (0, 9): 'R'})
        assert self.engine.is_in_check(board, Color.RED)
        assert self.engine.generate_legal_moves(board, Color.RED) == []
        assert self.engine.get_game_status(board, Color.RED) == GameStatus.BLACK_WIN

        board = build_board({(4, 9): 'K', (0, 0): 'r', (0, 3): 'p'})
        assert self.engine.is_in_check(board, Color.BLACK)
        assert self.engine.generate_legal_moves(board, Color.BLACK) == []
        assert self.engine.get_game_status(board, Color.BLACK) == GameStatus.RED_WIN
        assert is_in_check(board, Color.BLACK)
        assert game_status(board, Color.BLACK) == GameStatus.RED_WIN

    def test_generals_facing(self):
        board = build_board({(4, 0): 'k', (4, 9): 'K'})
        assert self.engine.generals_facing(board)

        assert not self.engine.generals_facing(board.with_piece((4, 5), Piece.from_fen_char('P')))
        assert not self.engine.generals_facing(build_board({(4, 0): 'k', (3, 9): 'K'}))
        assert not self.engine.generals_facing(build_board({(4, 0): 'k'}))


class TestLegalMoveGeneration:
    """合法走法生成的测试"""

    def setup_method(self):
        self.engine = RuleEngine()
        self.board = create_initial_board()

    def test_initial_move_count(self):
        """初始局面双方各有44种走法"""
        assert len(self.engine.generate_legal_moves(self.board, Color.RED)) == 44
        assert len(self.engine.generate_legal_moves(self.board, Color.BLACK)) == 44

    def test_moves_sorted_by_source_then_target(self):
        moves = self.engine.generate_legal_moves(self.board, Color.RED)
        keys = [(m.from_pos.y, m.from_pos.x, m.to_pos.y, m.to_pos.x) for m in moves]
        assert keys == sorted(keys)

    def test_pinned_piece_cannot_expose_generals(self):
        """帅将之间唯一的棋子不能离开该列"""
        board = build_board({(4, 0): 'k', (4, 5): 'C', (4, 9): 'K'})
        cannon_moves = self.engine.generate_piece_moves(board, Position(4, 5), Color.RED)

        assert cannon_moves
        assert all(move.to_pos.x == 4 for move in cannon_moves)
        assert Move((4, 5), (4, 1)) in cannon_moves

        board = build_board({(4, 0): 'k', (4, 5): 'N', (4, 9): 'K'})
        assert self.engine.generate_piece_moves(board, Position(4, 5), Color.RED) == []

    def test_king_cannot_step_into_check(self):
        board = build_board({(4, 0): 'k', (3, 9): 'K', (4, 5): 'r'})
        king_moves = self.engine.generate_piece_moves(board, Position(3, 9), Color.RED)
        targets = {move.to_pos for move in king_moves}

        assert Position(4, 9) not in targets
        assert Position(3, 8) in targets

    def test_legal_moves_are_safe(self):
        """每个合法走法执行后己方不被将军、帅将不照面，且几何合法"""
        board, color = self.board, Color.RED
        for _ in range(10):
            moves = self.engine.generate_legal_moves(board, color)
            for move in moves:
                assert self.engine.is_legal_move(board, move, color)
                after = board.make_move(move)
                assert not self.engine.is_in_check(after, color)
                assert not self.engine.generals_facing(after)
            # 选最后一个走法推进局面，让不同棋子都走到
            board = board.make_move(moves[-1])
            color = color.opponent

    def test_legal_moves_from(self):
        assert len(legal_moves_from(self.board, Position(1, 9))) == 2
        assert legal_moves_from(self.board, Position(4, 4)) == []
        # 指定的阵营与棋子不符
        assert legal_moves_from(self.board, Position(1, 9), Color.BLACK) == []

    def test_module_level_functions(self):
        assert is_legal_move(self.board, Move((1, 7), (1, 0)), Color.RED)
        assert len(legal_moves(self.board, Color.BLACK)) == 44
        assert not is_in_check(self.board, Color.RED)
        assert not generals_facing(self.board)
        assert game_status(self.board, Color.RED) == GameStatus.PLAYING


class TestGameStatus:
    """终局判定的测试"""

    def setup_method(self):
        self.engine = RuleEngine()

    def test_checkmate(self):
        board, color = ChessBoard.parse_fen(CHECKMATE_FEN)
        assert color == Color.BLACK
        assert self.engine.is_in_check(board, Color.BLACK)
        assert self.engine.is_checkmate(board, Color.BLACK)
        assert self.engine.get_game_status(board, Color.BLACK) == GameStatus.RED_WIN

    def test_no_moves_without_check_loses(self):
        """困毙也判负"""
        board, color = ChessBoard.parse_fen(STALEMATE_FEN)
        assert not self.engine.is_in_check(board, color)
        assert not self.engine.has_legal_move(board, color)
        assert not self.engine.is_checkmate(board, color)
        assert self.engine.get_game_status(board, color) == GameStatus.RED_WIN

    def test_playing(self):
        board = create_initial_board()
        assert self.engine.get_game_status(board, Color.RED) == GameStatus.PLAYING
        assert self.engine.get_game_status(board, Color.BLACK) == GameStatus.PLAYING
