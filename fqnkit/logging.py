from __future__ import annotations

import os
import sys
from threading import RLock
from typing import Any

from loguru import logger as _loguru_logger

LOG_MODE_ENV = "FQNKIT_LOG_MODE"
LOG_MODES = ("warning", "info", "debug")
_DEFAULT_MODE = "warning"
_LOG_DOMAIN = "fqnkit"

_CURRENT_MODE = _DEFAULT_MODE
_SINK_ID: int | None = None
_INITIALIZED = False
_LOCK = RLock()


def _normalize_mode(mode: str) -> str:
    normalized = mode.strip().lower()
    if normalized in LOG_MODES:
        return normalized
    raise ValueError(f"Invalid log mode '{mode}'. Expected one of: {', '.join(LOG_MODES)}")


def _mode_from_env() -> str:
    try:
        return _normalize_mode(os.getenv(LOG_MODE_ENV, _DEFAULT_MODE))
    except ValueError:
        return _DEFAULT_MODE


def _custom_format(record: dict[str, Any]) -> str:
    extra = record["extra"]
    origin = extra.get("module", "fqnkit")
    if extra.get("action"):
        origin = f"{origin}:{extra['action']}"
    level = f"[<level>{record['level']}</level>] " if _CURRENT_MODE == "debug" else ""
    return (
        f"<green>{record['time']:HH:mm:ss.SSS}</green> <cyan>{origin}</cyan> {level}"
        "<level>{message}</level>\n"
    )


def _stream_filter(record: dict[str, Any]) -> bool:
    return record.get("extra", {}).get("_log_domain") == _LOG_DOMAIN


def _install_sink(mode: str) -> None:
    global _SINK_ID, _CURRENT_MODE, _INITIALIZED

    normalized = _normalize_mode(mode)
    with _LOCK:
        if _SINK_ID is not None and normalized == _CURRENT_MODE:
            return
        if not _INITIALIZED:
            # loguru starts with a stderr sink of its own (id 0).
            try:
                _loguru_logger.remove(0)
            except ValueError:
                pass
            _INITIALIZED = True
        if _SINK_ID is not None:
            try:
                _loguru_logger.remove(_SINK_ID)
            except ValueError:
                pass
        _SINK_ID = _loguru_logger.add(
            sys.stderr,
            level=normalized.upper(),
            format=_custom_format,
            filter=_stream_filter,
            colorize=False,
        )
        _CURRENT_MODE = normalized


def set_log_mode(mode: str) -> None:
    """Set the verbosity of the fqnkit sink: warning, info or debug."""

    _install_sink(mode)


def configure_cli_logger(mode: str | None = None) -> None:
    _install_sink(_mode_from_env() if mode is None else mode)


def get_log_mode() -> str:
    return _CURRENT_MODE


def get_logger(**bind_kwargs: Any):
    """Return the loguru logger bound to the fqnkit log domain.

    The first call installs the fqnkit sink at the ``FQNKIT_LOG_MODE`` level
    (``warning`` when unset or invalid).
    """

    if not _INITIALIZED:
        _install_sink(_mode_from_env())
    bind_kwargs.setdefault("module", "fqnkit")
    bind_kwargs["_log_domain"] = _LOG_DOMAIN
    return _loguru_logger.bind(**bind_kwargs)
