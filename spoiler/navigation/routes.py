"""Screen stack with per-route focus and an explicit transition table.

This module has no UI or daemon concerns.
Every legal move is one entry in ``TRANSITIONS``; anything else is a no-op.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Screen(Enum):
    JOB_LIST = "job_list"
    JOB_DETAIL = "job_detail"


class Focus(Enum):
    LIST = "list"
    TABS = "tabs"
    FILE_TREE = "file_tree"
    NONE = "none"


DEFAULT_FOCUS: dict[Screen, Focus] = {
    Screen.JOB_LIST: Focus.LIST,
    Screen.JOB_DETAIL: Focus.TABS,
}


@dataclass(frozen=True)
class Route:
    """One stack entry: a screen plus the widget that owns keyboard focus."""

    screen: Screen
    focus: Focus

    @classmethod
    def enter(cls, screen: Screen) -> Route:
        """Return the route a freshly entered ``screen`` starts with."""
        return cls(screen, DEFAULT_FOCUS[screen])


ROOT_ROUTE = Route.enter(Screen.JOB_LIST)


class NavEvent(Enum):
    OPEN_DETAIL = "open_detail"
    BACK = "back"
    FOCUS_FILE_TREE = "focus_file_tree"
    FOCUS_TABS = "focus_tabs"


class TransitionKind(Enum):
    PUSH = "push"
    POP = "pop"
    REFOCUS = "refocus"


@dataclass(frozen=True)
class Transition:
    kind: TransitionKind
    screen: Screen | None = None
    focus: Focus | None = None


TRANSITIONS: dict[tuple[Screen, Focus, NavEvent], Transition] = {
    (Screen.JOB_LIST, Focus.LIST, NavEvent.OPEN_DETAIL): Transition(
        TransitionKind.PUSH, screen=Screen.JOB_DETAIL
    ),
    (Screen.JOB_DETAIL, Focus.TABS, NavEvent.BACK): Transition(TransitionKind.POP),
    (Screen.JOB_DETAIL, Focus.TABS, NavEvent.FOCUS_FILE_TREE): Transition(
        TransitionKind.REFOCUS, focus=Focus.FILE_TREE
    ),
    (Screen.JOB_DETAIL, Focus.FILE_TREE, NavEvent.FOCUS_TABS): Transition(
        TransitionKind.REFOCUS, focus=Focus.TABS
    ),
    (Screen.JOB_DETAIL, Focus.FILE_TREE, NavEvent.BACK): Transition(
        TransitionKind.REFOCUS, focus=Focus.TABS
    ),
}


class NavigationStack:
    """Non-empty stack of routes.

    The root route is created with the stack and can never be popped.
    Nothing here fetches data; it only decides what is drawn and which
    widget receives the next key.
    """

    def __init__(self, root: Route = ROOT_ROUTE) -> None:
        self._routes: list[Route] = [root]

    @property
    def depth(self) -> int:
        return len(self._routes)

    def routes(self) -> tuple[Route, ...]:
        return tuple(self._routes)

    def current(self) -> Route:
        return self._routes[-1]

    def current_focus(self) -> Focus:
        return self._routes[-1].focus

    def push(self, route: Route) -> None:
        self._routes.append(route)

    def pop(self) -> Route | None:
        """Remove the top route unless it is the root; return what was removed."""
        if len(self._routes) <= 1:
            return None
        return self._routes.pop()

    def set_focus(self, focus: Focus) -> None:
        top = self._routes[-1]
        self._routes[-1] = Route(top.screen, focus)

    def dispatch(self, event: NavEvent) -> bool:
        """Apply ``event`` through the transition table.

        Returns True when the stack changed. Combinations missing from the
        table leave the stack untouched.
        """
        top = self._routes[-1]
        transition = TRANSITIONS.get((top.screen, top.focus, event))
        if transition is None:
            return False
        if transition.kind is TransitionKind.PUSH:
            assert transition.screen is not None
            self.push(Route.enter(transition.screen))
            return True
        if transition.kind is TransitionKind.POP:
            return self.pop() is not None
        assert transition.focus is not None
        self.set_focus(transition.focus)
        return True


__all__ = [
    "DEFAULT_FOCUS",
    "Focus",
    "NavEvent",
    "NavigationStack",
    "ROOT_ROUTE",
    "Route",
    "Screen",
    "TRANSITIONS",
    "Transition",
    "TransitionKind",
]
