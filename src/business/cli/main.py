"""
CLI Main Entry Point - 命令行主入口

使用 Click 库构建命令行工具。
"""

import click

from src.business.cli.commands.dashboard import dashboard


@click.group()
@click.version_option(version="0.1.0", prog_name="stockticker")
def cli() -> None:
    """终端行情看板 - 命令行工具

    定时拉取行情并在终端中以彩色表格显示。
    """
    pass


# 注册子命令
cli.add_command(dashboard)


if __name__ == "__main__":
    cli()
