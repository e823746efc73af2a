"""
Configuration Management - 配置管理

加载和管理业务层配置：
- DashboardConfig: 行情看板配置
"""

from src.business.config.dashboard_config import (
    ColorConfig,
    ConfigError,
    DashboardConfig,
    ProviderConfig,
)

__all__ = ["ColorConfig", "ConfigError", "DashboardConfig", "ProviderConfig"]
