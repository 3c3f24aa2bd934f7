"""Counter hook toward an external metrics collector."""

import logging
from typing import Callable, Optional

__all__ = [
    "KEYS_GENERATED",
    "SIGNATURES_CREATED",
    "SIGNATURES_VERIFIED",
    "SIGNATURES_REJECTED",
    "set_metrics_hook",
    "increment",
]

logger = logging.getLogger(__name__)

KEYS_GENERATED = "keys_generated"
SIGNATURES_CREATED = "signatures_created"
SIGNATURES_VERIFIED = "signatures_verified"
SIGNATURES_REJECTED = "signatures_rejected"

_hook: Optional[Callable[[str], None]] = None


def set_metrics_hook(hook: Optional[Callable[[str], None]]) -> None:
    """
    Register the collector callback, or clear it with None.

    Args:
        hook: Callable receiving the counter name on every increment
    """
    global _hook
    if hook is not None and not callable(hook):
        raise TypeError("Metrics hook must be callable")
    _hook = hook


def increment(name: str) -> None:
    """Fire-and-forget counter increment; hook failures are only logged."""
    hook = _hook
    if hook is None:
        return
    try:
        hook(name)
    except Exception:
        logger.warning("Metrics hook failed for counter %s", name, exc_info=True)
