"""Tests for the navigation stack and its transition table.

The root route can never be popped, and events missing from the table leave
the stack untouched.
"""

from __future__ import annotations

import itertools
import unittest

from spoiler.navigation import (
    DetailTab,
    Focus,
    NavEvent,
    NavigationStack,
    ROOT_ROUTE,
    Route,
    Screen,
    TRANSITIONS,
)


class NavigationStackTests(unittest.TestCase):
    def test_starts_at_job_list_with_list_focus(self) -> None:
        stack = NavigationStack()
        self.assertEqual(stack.current(), Route(Screen.JOB_LIST, Focus.LIST))
        self.assertEqual(stack.depth, 1)

    def test_pop_at_root_is_noop(self) -> None:
        stack = NavigationStack()
        self.assertIsNone(stack.pop())
        self.assertIsNone(stack.pop())
        self.assertEqual(stack.routes(), (ROOT_ROUTE,))

    def test_open_detail_then_back_returns_to_root(self) -> None:
        stack = NavigationStack()
        self.assertTrue(stack.dispatch(NavEvent.OPEN_DETAIL))
        self.assertEqual(stack.current(), Route(Screen.JOB_DETAIL, Focus.TABS))
        self.assertEqual(stack.depth, 2)

        self.assertTrue(stack.dispatch(NavEvent.BACK))
        self.assertEqual(stack.current(), ROOT_ROUTE)
        self.assertFalse(stack.dispatch(NavEvent.BACK))
        self.assertEqual(stack.depth, 1)

    def test_file_tree_focus_round_trip_keeps_depth(self) -> None:
        stack = NavigationStack()
        stack.dispatch(NavEvent.OPEN_DETAIL)

        self.assertTrue(stack.dispatch(NavEvent.FOCUS_FILE_TREE))
        self.assertEqual(stack.current_focus(), Focus.FILE_TREE)
        self.assertEqual(stack.depth, 2)

        self.assertTrue(stack.dispatch(NavEvent.BACK))
        self.assertEqual(stack.current(), Route(Screen.JOB_DETAIL, Focus.TABS))
        self.assertEqual(stack.depth, 2)

        stack.dispatch(NavEvent.FOCUS_FILE_TREE)
        self.assertTrue(stack.dispatch(NavEvent.FOCUS_TABS))
        self.assertEqual(stack.current_focus(), Focus.TABS)

    def test_unlisted_combinations_are_noops(self) -> None:
        for screen, focus, event in itertools.product(Screen, Focus, NavEvent):
            if (screen, focus, event) in TRANSITIONS:
                continue
            stack = NavigationStack()
            if screen is Screen.JOB_DETAIL:
                stack.push(Route(screen, focus))
            else:
                stack.set_focus(focus)
            before = stack.routes()
            with self.subTest(screen=screen, focus=focus, event=event):
                self.assertFalse(stack.dispatch(event))
                self.assertEqual(stack.routes(), before)

    def test_stack_never_empties_under_any_event_sequence(self) -> None:
        stack = NavigationStack()
        for event in itertools.islice(itertools.cycle(list(NavEvent)), 200):
            stack.dispatch(event)
            self.assertGreaterEqual(stack.depth, 1)
            self.assertEqual(stack.routes()[0], ROOT_ROUTE)

    def test_transition_table_size(self) -> None:
        self.assertEqual(len(TRANSITIONS), 5)


class DetailTabTests(unittest.TestCase):
    def test_previous_stops_at_first_tab(self) -> None:
        self.assertIsNone(DetailTab.OVERVIEW.previous())
        self.assertIs(DetailTab.FILES.previous(), DetailTab.OVERVIEW)

    def test_next_clamps_at_last_tab(self) -> None:
        self.assertIs(DetailTab.OVERVIEW.next(), DetailTab.FILES)
        self.assertIs(DetailTab.TRANSFER.next(), DetailTab.TRANSFER)
        self.assertEqual(DetailTab.FILES.title, "Files")


if __name__ == "__main__":
    unittest.main()
