"""
Dashboard Configuration - 行情看板配置

加载和管理终端行情看板的配置参数。dataclass 默认值即为内置的固定清单，
YAML 文件只需覆盖需要修改的字段。

## 默认值

| 配置项             | 默认值                                     | 说明                     |
|--------------------|--------------------------------------------|--------------------------|
| refresh_interval   | 5                                          | 刷新间隔（秒）           |
| exchanges          | Dow=^DJI, S&P500=^GSPC, NASDAQ=^IXIC      | 首行指数（标签: 代码）   |
| tracked            | EA, GOOGL, TSLA, AMZN, SPY, IBM            | 表格中的跟踪标的         |
| sort_keys          | change_percent, name                       | 排序键循环（Ctrl-R 切换）|
| color.attribute    | change_percent                             | 行颜色判断字段           |
| color.threshold    | 0.5                                        | > 阈值绿色，< -阈值红色  |
| provider.rate_limit| 0.5                                        | 两次请求最小间隔（秒）   |

## 配置来源（优先级从高到低）

1. 命令行 ``--config PATH``
2. 环境变量 ``STOCKTICKER_CONFIG``（支持 .env 文件）
3. 仓库内 ``config/dashboard/watchlist.yaml``
4. dataclass 默认值
"""

import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from src.data.models import Attribute
from src.engine.ranking import DEFAULT_SORT_KEYS

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "STOCKTICKER_CONFIG"


class ConfigError(ValueError):
    """配置文件内容无效"""

    pass


def _default_exchanges() -> dict[str, str]:
    return {"Dow": "^DJI", "S&P500": "^GSPC", "NASDAQ": "^IXIC"}


def _default_tracked() -> list[str]:
    return ["EA", "GOOGL", "TSLA", "AMZN", "SPY", "IBM"]


def parse_attribute(value: Any) -> Attribute:
    """解析字段名（大小写不敏感，接受 value 或枚举名）

    Args:
        value: 如 "change_percent" / "CHANGE_PERCENT"

    Returns:
        Attribute 枚举
    """
    if isinstance(value, Attribute):
        return value
    text = str(value).strip().lower()
    for attribute in Attribute:
        if text in (attribute.value, attribute.name.lower()):
            return attribute
    raise ConfigError(f"未知字段: {value!r}")


@dataclass
class ColorConfig:
    """行颜色规则

    Attributes:
        attribute: 判断颜色使用的数值字段
        threshold: 正阈值；值 > threshold 为正色，< -threshold 为负色，其余中性
    """

    attribute: Attribute = Attribute.CHANGE_PERCENT
    threshold: float = 0.5


@dataclass
class ProviderConfig:
    """行情源配置"""

    rate_limit: float = 0.5


@dataclass
class DashboardConfig:
    """看板配置"""

    refresh_interval: float = 5.0
    exchanges: dict[str, str] = field(default_factory=_default_exchanges)
    tracked: list[str] = field(default_factory=_default_tracked)
    sort_keys: list[Attribute] = field(default_factory=lambda: list(DEFAULT_SORT_KEYS))
    color: ColorConfig = field(default_factory=ColorConfig)
    provider: ProviderConfig = field(default_factory=ProviderConfig)

    def validate(self) -> "DashboardConfig":
        """校验配置，返回自身以便链式调用

        Raises:
            ConfigError: 任一字段无效
        """
        if not math.isfinite(self.refresh_interval) or self.refresh_interval <= 0:
            raise ConfigError(f"refresh_interval 必须大于 0: {self.refresh_interval}")
        if not self.tracked:
            raise ConfigError("tracked 不能为空")
        for ticker in [*self.exchanges.values(), *self.tracked]:
            if not isinstance(ticker, str) or not ticker.strip():
                raise ConfigError(f"无效的代码: {ticker!r}")
        if len(set(self.tracked)) != len(self.tracked):
            raise ConfigError("tracked 中存在重复代码")
        if len(set(self.exchanges.values())) != len(self.exchanges):
            raise ConfigError("exchanges 中存在重复代码")
        if not self.sort_keys:
            raise ConfigError("sort_keys 不能为空")
        if len(set(self.sort_keys)) != len(self.sort_keys):
            raise ConfigError("sort_keys 中存在重复字段")
        for key in self.sort_keys:
            if key.is_text and key is not Attribute.NAME:
                raise ConfigError(f"不能按 {key.value} 排序")
        if self.color.attribute.is_text:
            raise ConfigError(f"颜色字段必须是数值字段: {self.color.attribute.value}")
        if not math.isfinite(self.color.threshold) or self.color.threshold < 0:
            raise ConfigError(f"color.threshold 不能为负: {self.color.threshold}")
        if not math.isfinite(self.provider.rate_limit) or self.provider.rate_limit < 0:
            raise ConfigError(f"provider.rate_limit 不能为负: {self.provider.rate_limit}")
        return self

    @classmethod
    def from_yaml(cls, path: str | Path) -> "DashboardConfig":
        """从 YAML 文件加载配置"""
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"YAML 解析失败: {path}: {e}") from e
        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DashboardConfig":
        """从字典创建配置"""
        if not isinstance(data, dict):
            raise ConfigError("配置文件顶层必须是映射")

        config = cls()

        try:
            if "refresh_interval" in data:
                config.refresh_interval = float(data["refresh_interval"])

            if "exchanges" in data:
                exchanges = data["exchanges"] or {}
                if not isinstance(exchanges, dict):
                    raise ConfigError("exchanges 必须是 标签: 代码 映射")
                config.exchanges = {str(label): str(ticker) for label, ticker in exchanges.items()}

            if "tracked" in data:
                tracked = data["tracked"] or []
                if not isinstance(tracked, list):
                    raise ConfigError("tracked 必须是列表")
                config.tracked = [str(t) for t in tracked]

            if "sort_keys" in data:
                config.sort_keys = [parse_attribute(k) for k in data["sort_keys"] or []]

            if "color" in data:
                c = data["color"] or {}
                if not isinstance(c, dict):
                    raise ConfigError("color 必须是映射")
                config.color = ColorConfig(
                    attribute=parse_attribute(c.get("attribute", ColorConfig.attribute)),
                    threshold=float(c.get("threshold", ColorConfig.threshold)),
                )

            if "provider" in data:
                p = data["provider"] or {}
                if not isinstance(p, dict):
                    raise ConfigError("provider 必须是映射")
                config.provider = ProviderConfig(
                    rate_limit=float(p.get("rate_limit", ProviderConfig.rate_limit)),
                )
        except ConfigError:
            raise
        except (TypeError, ValueError) as e:
            raise ConfigError(f"配置值类型错误: {e}") from e

        return config.validate()

    @classmethod
    def load(cls, path: Optional[str | Path] = None) -> "DashboardConfig":
        """加载配置

        Args:
            path: 显式指定的配置文件；为 None 时依次查找环境变量和默认位置

        Returns:
            DashboardConfig
        """
        if path is None:
            load_dotenv()
            path = os.getenv(CONFIG_ENV_VAR) or None

        if path is not None:
            config_file = Path(path)
            if not config_file.exists():
                raise ConfigError(f"配置文件不存在: {config_file}")
            logger.info(f"加载配置: {config_file}")
            return cls.from_yaml(config_file)

        config_dir = (
            Path(__file__).parent.parent.parent.parent / "config" / "dashboard"
        )
        config_file = config_dir / "watchlist.yaml"
        if config_file.exists():
            logger.info(f"加载配置: {config_file}")
            return cls.from_yaml(config_file)
        return cls()
