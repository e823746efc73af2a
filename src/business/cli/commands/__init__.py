"""
CLI Commands - 命令行子命令
"""

from src.business.cli.commands.dashboard import dashboard

__all__ = ["dashboard"]
