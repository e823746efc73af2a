"""
Quotes - 行情快照与刷新

- SnapshotStore: 加锁的共享快照存储
- RefreshCycle: 一次完整的 拉取 → 排序 → 渲染
"""

from src.business.quotes.refresh import CycleReport, RefreshCycle
from src.business.quotes.store import SnapshotStore, UnknownTicker

__all__ = ["CycleReport", "RefreshCycle", "SnapshotStore", "UnknownTicker"]
