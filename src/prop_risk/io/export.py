"""
JSON export/import of AccountConfig.

The exported document is {"version": "1.0", "config": {...}} with the
camelCase field names of the account record. Import accepts either that
wrapper or a bare config object; missing fields take the defaults below
and unknown fields are dropped.

Defaults live here, at the load boundary, and nowhere in the engine.
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from prop_risk.core.config import AccountConfig
from prop_risk.core.enums import TradingMode
from prop_risk.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"

DEFAULT_ACCOUNT_CONFIG: dict[str, Any] = {
    "id": "default",
    "name": "My Account",
    "account_balance": 100000.0,
    "daily_drawdown_pct": 5.0,
    "max_drawdown_pct": 10.0,
    "profit_target_pct": 10.0,
    "consistency_rule_pct": 20.0,
    "consistency_rule_enabled": False,
    "win_rate": 60.0,
    "risk_reward_ratio": 2.0,
    "trades_per_day": 3,
    "mode": TradingMode.NORMAL,
    "custom_risk_per_trade": 0.0,
}


def default_config() -> AccountConfig:
    return AccountConfig(**DEFAULT_ACCOUNT_CONFIG)


def new_account(name: str) -> AccountConfig:
    """A default-valued account with a fresh id, for adding to a comparison."""
    return AccountConfig(**{**DEFAULT_ACCOUNT_CONFIG, "id": str(uuid.uuid4()), "name": name})


def merge_with_defaults(raw: Mapping[str, Any]) -> AccountConfig:
    """Overlay a stored/imported mapping onto the defaults.

    Keys may be camelCase (as exported) or snake_case. Unknown keys are
    ignored; values of the wrong type raise ConfigurationError.
    """
    merged = dict(DEFAULT_ACCOUNT_CONFIG)
    for name, field in AccountConfig.model_fields.items():
        alias = field.alias or name
        if alias in raw:
            merged[name] = raw[alias]
        elif name in raw:
            merged[name] = raw[name]

    try:
        return AccountConfig(**merged)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid account configuration values: {exc}") from exc


def export_config_json(config: AccountConfig) -> str:
    """Serialize one account as the versioned export document."""
    document = {
        "version": EXPORT_VERSION,
        "config": config.model_dump(mode="json", by_alias=True),
    }
    return json.dumps(document, indent=2, ensure_ascii=False)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def import_config_json(text: str) -> AccountConfig:
    """Parse an export document (or a bare config object) back into an AccountConfig.

    Raises:
        ConfigurationError: malformed JSON, or no numeric accountBalance
    """
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError("Failed to parse JSON config") from exc

    imported = parsed.get("config", parsed) if isinstance(parsed, dict) else None
    if not isinstance(imported, dict):
        raise ConfigurationError("Invalid config file format: expected a JSON object")

    balance = imported.get("accountBalance", imported.get("account_balance"))
    if not _is_number(balance):
        raise ConfigurationError("Invalid config file format: accountBalance must be a number")

    version = parsed.get("version") if isinstance(parsed, dict) else None
    if version is not None and version != EXPORT_VERSION:
        logger.warning("Importing config exported as version %s (expected %s)", version, EXPORT_VERSION)

    return merge_with_defaults(imported)


def export_filename(config: AccountConfig) -> str:
    """Suggested file name, e.g. 'risk-config-my-account.json'."""
    slug = re.sub(r"\s+", "-", config.name).lower()
    return f"risk-config-{slug}.json"


def save_config(config: AccountConfig, path: Path) -> Path:
    """Write the export document to `path` (a directory gets the suggested file name)."""
    if path.is_dir():
        path = path / export_filename(config)
    path.write_text(export_config_json(config), encoding="utf-8")
    logger.info("Exported account %s to %s", config.id, path)
    return path


def load_config(path: Path) -> AccountConfig:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {path}: {exc}") from exc
    return import_config_json(text)
