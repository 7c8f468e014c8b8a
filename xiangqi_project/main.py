#!/usr/bin/env python3
"""
Xiangqi Engine 主入口文件

提供查看局面、列出合法走法和求最佳走法的命令行接口。
"""

import sys
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from xiangqi_project import __version__, __description__
from xiangqi_project.src.xiangqi_engine import (
    AlphaBetaSearcher, BoardValidator, ChessBoard, Color, ConfigManager, Evaluator,
    INITIAL_FEN, RuleEngine, SearchConfig, XiangqiEngineError, setup_logger
)

console = Console()


def print_banner():
    """打印项目横幅"""
    banner_text = Text()
    banner_text.append("Xiangqi Engine\n", style="bold blue")
    banner_text.append(f"版本: {__version__}\n", style="green")
    banner_text.append(__description__, style="white")

    panel = Panel(
        banner_text,
        title="中国象棋引擎",
        title_align="center",
        border_style="blue",
        padding=(1, 2)
    )
    console.print(panel)


def render_board(board: ChessBoard, turn: Color) -> Panel:
    """把棋盘渲染为带颜色的面板，红方棋子红色，黑方棋子白色加粗"""
    text = Text()
    text.append("   a  b  c  d  e  f  g  h  i\n", style="dim")
    for y in range(10):
        text.append(f"{y} ", style="dim")
        for x in range(9):
            piece = board.get_piece_at((x, y))
            if piece is None:
                text.append("．")
            else:
                text.append(piece.name, style="bold red" if piece.color == Color.RED else "bold")
            if x < 8:
                text.append(" ")
        text.append("\n")
        if y == 4:
            text.append("  " + "～" * 13 + "\n", style="blue")

    side = "红方" if turn == Color.RED else "黑方"
    return Panel(text, title=f"轮到{side}", border_style="yellow")


@click.group()
@click.version_option(version=__version__, prog_name="Xiangqi Engine")
@click.option('--debug', is_flag=True, help='启用调试日志')
@click.option('--config-dir', type=click.Path(file_okay=False), default=None, help='配置目录')
@click.pass_context
def cli(ctx: click.Context, debug: bool, config_dir: Optional[str]):
    """中国象棋引擎 - 规则判定与 alpha-beta 搜索"""
    ctx.ensure_object(dict)
    search_config = SearchConfig()
    evaluator = Evaluator()

    if config_dir:
        manager = ConfigManager(config_dir)
        system_config = manager.get_system_config()
        search_config = manager.get_search_config()
        evaluator = Evaluator(manager.get_evaluation_config())
        setup_logger('xiangqi_project', level='DEBUG' if debug else system_config.log_level,
                     log_file=system_config.log_file or None, log_dir=system_config.log_dir)
        console.print(f"[green]使用配置目录: {config_dir}[/green]")
    else:
        setup_logger('xiangqi_project', level='DEBUG' if debug else 'WARNING')

    ctx.obj['search_config'] = search_config
    ctx.obj['evaluator'] = evaluator


def _load(fen: str):
    try:
        return ChessBoard.parse_fen(fen)
    except XiangqiEngineError as e:
        raise click.BadParameter(str(e), param_hint='--fen') from e


@cli.command()
@click.option('--fen', default=INITIAL_FEN, show_default=False, help='FEN局面，默认为初始局面')
def show(fen: str):
    """显示局面和校验结果"""
    board, turn = _load(fen)
    console.print(render_board(board, turn))

    is_valid, errors = BoardValidator().full_validation(board, turn)
    if not is_valid:
        for error in errors:
            console.print(f"[yellow]警告: {error}[/yellow]")

    status = RuleEngine().get_game_status(board, turn)
    console.print(f"状态: [bold]{status.value}[/bold]")


@cli.command()
@click.option('--fen', default=INITIAL_FEN, help='FEN局面，默认为初始局面')
def moves(fen: str):
    """列出走子方的全部合法走法"""
    board, turn = _load(fen)
    legal = RuleEngine().generate_legal_moves(board, turn)

    table = Table(title=f"合法走法 ({len(legal)})")
    table.add_column("走法", style="cyan")
    table.add_column("棋子")
    table.add_column("吃子", style="red")

    for move in legal:
        piece = board.get_piece_at(move.from_pos)
        captured = board.get_piece_at(move.to_pos)
        table.add_row(move.to_coordinate_notation(), piece.name, captured.name if captured else "")

    console.print(table)


@cli.command()
@click.option('--fen', default=INITIAL_FEN, help='FEN局面，默认为初始局面')
@click.option('--depth', type=click.IntRange(min=1), default=None, help='搜索深度')
@click.pass_context
def bestmove(ctx: click.Context, fen: str, depth: Optional[int]):
    """为走子方搜索最佳走法"""
    board, turn = _load(fen)
    searcher = AlphaBetaSearcher(ctx.obj['search_config'], evaluator=ctx.obj['evaluator'])
    result = searcher.search(board, depth, turn)

    if result.move is None:
        console.print("[red]走子方没有合法走法[/red]")
        return

    console.print(
        f"最佳走法: [bold cyan]{result.move.to_coordinate_notation()}[/bold cyan]  "
        f"评分: {result.score}  深度: {result.depth}  "
        f"节点: {result.stats.nodes}  耗时: {result.stats.time_used:.2f}秒"
    )


@cli.command()
def info():
    """显示系统信息"""
    print_banner()


def main():
    """主入口函数"""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]程序被用户中断[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
