"""
Business Layer CLI - 业务层命令行工具

提供命令：
- dashboard: 实时行情看板

入口: ``src.business.cli.main:cli``
"""
