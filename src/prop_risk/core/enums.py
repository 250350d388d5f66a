"""Enumerations shared across the engine and its collaborators."""

from __future__ import annotations

from enum import StrEnum


class TradingMode(StrEnum):
    CONSERVATIVE = "conservative"
    NORMAL = "normal"
    AGGRESSIVE = "aggressive"
    CUSTOM = "custom"


class WarningSeverity(StrEnum):
    DANGER = "danger"
    WARNING = "warning"
    INFO = "info"
