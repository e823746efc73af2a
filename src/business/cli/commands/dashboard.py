"""
Dashboard Command - 实时行情看板

在终端中显示实时刷新的行情表：
- 首行：主要指数（涨绿跌红）
- 表头 + 跟踪标的（按涨跌幅排序，可切换）

快捷键：
- Esc / q：退出
- Ctrl-R / s：切换排序字段
- r / F5：立即刷新
"""

import logging
import sys
from typing import Optional

import click

from src.business.cli.dashboard import CursesTerminal, DashboardRenderer, DisplayInitFailure, Frame
from src.business.cli.dashboard.event_loop import DashboardLoop
from src.business.cli.dashboard.threshold_checker import Color
from src.business.config.dashboard_config import ConfigError, DashboardConfig
from src.business.quotes import RefreshCycle, SnapshotStore, UnknownTicker
from src.data.providers import YahooProvider
from src.engine.ranking import DisplayRanker

logger = logging.getLogger(__name__)

EXIT_DISPLAY_INIT_FAILED = 1
EXIT_UNKNOWN_TICKER = 2


@click.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="看板配置文件路径（YAML）",
)
@click.option(
    "--interval",
    "-i",
    type=float,
    default=None,
    help="刷新间隔（秒），覆盖配置文件",
)
@click.option(
    "--once",
    is_flag=True,
    help="只拉取一次并以纯文本输出，不进入全屏模式",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default="stockticker.log",
    show_default=True,
    help="日志文件（全屏模式下终端不可用于输出日志）",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="显示详细日志",
)
def dashboard(
    config_path: Optional[str],
    interval: Optional[float],
    once: bool,
    log_file: str,
    verbose: bool,
) -> None:
    """实时行情看板

    定时拉取指数与跟踪标的行情，按颜色区分涨跌。

    \b
    示例：
      # 使用默认配置
      stockticker dashboard

      # 每 10 秒刷新
      stockticker dashboard -i 10

      # 单次输出
      stockticker dashboard --once
    """
    # 配置日志
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename=log_file,
    )

    try:
        config = DashboardConfig.load(config_path)
        if interval is not None:
            config.refresh_interval = interval
            config.validate()
    except ConfigError as e:
        raise click.ClickException(f"配置错误: {e}")

    store = SnapshotStore(config.exchanges, config.tracked)
    ranker = DisplayRanker(config.sort_keys)
    renderer = DashboardRenderer(config.color)
    provider = YahooProvider(rate_limit=config.provider.rate_limit)

    if once:
        try:
            report = RefreshCycle(store, provider, ranker, renderer).run()
        except UnknownTicker as e:
            logger.exception("快照存储不变量被破坏")
            click.echo(f"❌ 内部错误: {e}", err=True)
            sys.exit(EXIT_UNKNOWN_TICKER)
        click.echo(_styled_text(report.frame))
        return

    terminal = CursesTerminal()
    try:
        with terminal:
            cycle = RefreshCycle(store, provider, ranker, renderer, terminal)
            DashboardLoop(terminal, cycle, ranker, config.refresh_interval).run()
    except DisplayInitFailure as e:
        logger.error(f"终端初始化失败: {e}")
        click.echo(f"❌ 终端初始化失败: {e}", err=True)
        sys.exit(EXIT_DISPLAY_INIT_FAILED)
    except UnknownTicker as e:
        logger.exception("快照存储不变量被破坏")
        click.echo(f"❌ 内部错误: {e}", err=True)
        sys.exit(EXIT_UNKNOWN_TICKER)
    except KeyboardInterrupt:
        logger.info("Interrupted")

    click.echo("👋 已退出行情看板")


def _styled_text(frame: Frame) -> str:
    """Frame 转为带 ANSI 颜色的文本（非 TTY 时 click 会自动去色）"""
    lines = []
    for row in frame.rows:
        line = ""
        for run in row.runs:
            pad = " " * max(0, run.x - len(click.unstyle(line)))
            fg = None if run.fg is Color.DEFAULT else run.fg.value
            line += pad + click.style(run.text.rstrip(), fg=fg)
        lines.append(line)
    return "\n".join(lines)
