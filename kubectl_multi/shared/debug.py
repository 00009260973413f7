"""Runtime-configurable debug logging utilities."""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator

_logger = logging.getLogger("kubectl_multi")


def configure_root(level: int = logging.INFO) -> None:
    """Ensure standard logging configuration is present."""

    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )


def is_enabled() -> bool:
    """Return whether verbose debug logging is active."""

    return _logger.isEnabledFor(logging.DEBUG)


def enable() -> None:
    """Enable verbose logging for the kubectl_multi logger tree."""

    _logger.setLevel(logging.DEBUG)
    _logger.debug("Verbose debug mode enabled")


def disable() -> None:
    """Disable verbose logging for the kubectl_multi logger tree."""

    _logger.debug("Verbose debug mode disabled")
    _logger.setLevel(logging.INFO)


@contextmanager
def temporary_enable() -> Iterator[None]:
    """Temporarily enable verbose logging within a block."""

    was_enabled = is_enabled()
    if not was_enabled:
        enable()
    try:
        yield
    finally:
        if not was_enabled:
            disable()


def _normalise(payload: Dict[str, Any]) -> str:
    try:
        return json.dumps(payload, separators=(",", ":"))
    except TypeError:
        return str(payload)


def log_request(context: str, payload: Dict[str, Any]) -> None:
    """Emit structured debug log for an outgoing cluster invocation."""

    if not is_enabled():
        return
    logging.getLogger("kubectl_multi.request").debug(
        "%s request: %s", context, _normalise(payload)
    )


def log_response(context: str, payload: Dict[str, Any]) -> None:
    """Emit structured debug log for a cluster invocation result."""

    if not is_enabled():
        return
    logging.getLogger("kubectl_multi.response").debug(
        "%s response: %s", context, _normalise(payload)
    )
