"""
Business Layer - 业务模块层

终端行情看板的业务逻辑层，包含：
- quotes: 快照存储与刷新周期
- cli: 命令行与终端看板
- config: 配置管理
"""
