"""Navigation state owned by the input/render loop.

- ``routes``: screen stack, focus and the transition table
- ``overlay``: modal widget plus its short-lived input mode
- ``tabs``: the job detail tabs
"""

from __future__ import annotations

from .overlay import InputMode, OverlayState, OverlayWidget
from .tabs import DetailTab
from .routes import (
    DEFAULT_FOCUS,
    ROOT_ROUTE,
    TRANSITIONS,
    Focus,
    NavEvent,
    NavigationStack,
    Route,
    Screen,
    Transition,
    TransitionKind,
)

__all__ = [
    "DEFAULT_FOCUS",
    "DetailTab",
    "Focus",
    "InputMode",
    "NavEvent",
    "NavigationStack",
    "OverlayState",
    "OverlayWidget",
    "ROOT_ROUTE",
    "Route",
    "Screen",
    "TRANSITIONS",
    "Transition",
    "TransitionKind",
]
