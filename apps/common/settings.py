# apps/common/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_CATALOG_URL = "https://www.googleapis.com/books/v1/volumes"
DEFAULT_TIMEOUT_S = 15.0
DEFAULT_PAGE_SIZE = 10
DEFAULT_LOG_LEVEL = "INFO"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    return data or {}


def _env(key: str) -> Optional[str]:
    v = os.getenv(key)
    return v.strip() if isinstance(v, str) and v.strip() else None


def _config_path(config_path: Optional[str] = None) -> Path:
    if config_path:
        return Path(config_path)
    return Path(_env("BOOKREVIEW_CONFIG_PATH") or "config/app.yaml")


def log_level_name(config_path: Optional[str] = None) -> str:
    """BOOKREVIEW_LOG_LEVEL, then `log_level` from the config file, then INFO."""
    raw = _env("BOOKREVIEW_LOG_LEVEL")
    if raw is None:
        try:
            raw = _read_yaml(_config_path(config_path)).get("log_level")
        except Exception:
            raw = None
    level = str(raw or DEFAULT_LOG_LEVEL).upper()
    return level if level in _LOG_LEVELS else DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class AppSettings:
    catalog_url: str = DEFAULT_CATALOG_URL
    request_timeout_s: Optional[float] = DEFAULT_TIMEOUT_S
    api_key: Optional[str] = None
    page_size: int = DEFAULT_PAGE_SIZE
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(config_path: Optional[str] = None) -> AppSettings:
    """
    Resolution order (highest -> lowest):
      1) Explicit function argument
      2) BOOKREVIEW_CONFIG_PATH env var
      3) config/app.yaml (missing file -> defaults)
    Individual fields can be overridden via env vars:
      - BOOKREVIEW_CATALOG_URL
      - BOOKREVIEW_REQUEST_TIMEOUT_S (0 or empty disables the timeout)
      - BOOKREVIEW_API_KEY
      - BOOKREVIEW_PAGE_SIZE
      - BOOKREVIEW_LOG_LEVEL
    """
    cfg_path = _config_path(config_path)
    cfg = _read_yaml(cfg_path)

    catalog_url = _env("BOOKREVIEW_CATALOG_URL") or cfg.get("catalog_url") or DEFAULT_CATALOG_URL
    timeout_raw = _env("BOOKREVIEW_REQUEST_TIMEOUT_S")
    if timeout_raw is None:
        timeout_raw = cfg.get("request_timeout_s", DEFAULT_TIMEOUT_S)
    api_key = _env("BOOKREVIEW_API_KEY") or cfg.get("api_key")
    page_size_raw = _env("BOOKREVIEW_PAGE_SIZE") or cfg.get("page_size", DEFAULT_PAGE_SIZE)
    log_level = str(_env("BOOKREVIEW_LOG_LEVEL") or cfg.get("log_level") or DEFAULT_LOG_LEVEL).upper()

    invalid: List[str] = []

    timeout_s: Optional[float] = None
    try:
        if timeout_raw not in (None, ""):
            timeout_s = float(timeout_raw)
            if timeout_s < 0:
                invalid.append(f"request_timeout_s={timeout_raw!r} (must be >= 0)")
            elif timeout_s == 0:
                timeout_s = None
    except (TypeError, ValueError):
        invalid.append(f"request_timeout_s={timeout_raw!r} (not a number)")

    page_size = DEFAULT_PAGE_SIZE
    try:
        page_size = int(page_size_raw)
        if page_size < 1:
            invalid.append(f"page_size={page_size_raw!r} (must be >= 1)")
    except (TypeError, ValueError):
        invalid.append(f"page_size={page_size_raw!r} (not an integer)")

    if log_level not in _LOG_LEVELS:
        invalid.append(f"log_level={log_level!r} (expected one of {', '.join(_LOG_LEVELS)})")

    if invalid:
        raise ValueError(
            "Invalid configuration: " + ", ".join(invalid) +
            f". Config file used: {cfg_path}"
        )

    return AppSettings(
        catalog_url=str(catalog_url),
        request_timeout_s=timeout_s,
        api_key=str(api_key) if api_key else None,
        page_size=page_size,
        log_level=log_level,
    )
