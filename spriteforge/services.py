"""Process-wide registry of engine services, keyed by type or any hashable key."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any

_services: dict[Hashable, Any] = {}


def provide(key: Hashable, service: Any) -> None:
    """Register ``service`` under ``key``, replacing any previous one."""
    _services[key] = service


def get(key: Hashable) -> Any | None:
    """Return the service registered under ``key``, or ``None``."""
    return _services.get(key)


def reset() -> None:
    """Forget every registered service."""
    _services.clear()