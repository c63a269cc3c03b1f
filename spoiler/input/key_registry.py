"""Key tables for the input router.

Each focus area and overlay widget owns one table. A key may appear at most
once per table; binding it a second time is a programming error.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

KeyHandler = Callable[[], "bool | None"]


@dataclass(frozen=True)
class KeyComboBinding:
    """Key tokens that all trigger ``handler``."""

    combos: tuple[str, ...]
    handler: KeyHandler


class KeyComboRegistry:
    """Exact-match key table; ``dispatch`` returns ``None`` for unbound keys."""

    def __init__(self) -> None:
        self._table: dict[str, KeyHandler] = {}

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            for combo in binding.combos:
                if combo in self._table:
                    raise ValueError(f"key {combo!r} is bound twice")
                self._table[combo] = binding.handler
        return self

    def bound_keys(self) -> frozenset[str]:
        return frozenset(self._table)

    def dispatch(self, key: str) -> bool | None:
        """Run the handler for ``key``. A true result asks the dashboard to quit."""
        handler = self._table.get(key)
        return None if handler is None else handler()


__all__ = ["KeyComboBinding", "KeyComboRegistry", "KeyHandler"]
