"""Key-token to action tables used by the mode handlers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

KeyAction = Callable[[], "bool | None"]


@dataclass(frozen=True)
class KeyComboBinding:
    """One action reachable from any of ``combos``."""

    combos: tuple[str, ...]
    handler: KeyAction


class KeyComboRegistry:
    """Exact-match dispatch table from key tokens to actions.

    ``dispatch`` returns ``None`` for unbound keys so callers can fall through
    to their own handling; bound actions return ``True`` to request quit.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, KeyAction] = {}

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            for combo in binding.combos:
                self._handlers[combo] = binding.handler
        return self

    def dispatch(self, key: str) -> bool | None:
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return bool(handler())
