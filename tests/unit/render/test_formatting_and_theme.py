from __future__ import annotations

import datetime as dt
import math
import unittest

from spoiler.daemon.types import Job, JobStatus
from spoiler.formatting import (
    format_bytes,
    format_eta,
    format_field,
    format_percent,
    format_rate,
    format_ratio,
    format_timestamp,
)
from spoiler.state import SortKey
from spoiler.ui_theme import (
    DEFAULT_THEME,
    OCEAN_THEME,
    PLAIN_THEME,
    apply_color_overrides,
    available_theme_names,
    parse_hex_color,
    resolve_theme,
)


class FormattingTests(unittest.TestCase):
    def test_sizes_use_decimal_units(self) -> None:
        self.assertEqual(format_bytes(1500), "1.5 kB")
        self.assertEqual(format_bytes(None), "-")
        self.assertEqual(format_rate(2_000_000), "2.0 MB/s")
        self.assertEqual(format_rate(0), "-")

    def test_eta(self) -> None:
        self.assertEqual(format_eta(None), "-")
        self.assertEqual(format_eta(0), "done")
        self.assertEqual(format_eta(120), "2 minutes")

    def test_percent_and_ratio(self) -> None:
        self.assertEqual(format_percent(0.256), "25.6%")
        self.assertEqual(format_percent(1.5), "100.0%")
        self.assertEqual(format_ratio(math.nan), "-")
        self.assertEqual(format_ratio(math.inf), "inf")
        self.assertEqual(format_ratio(1.234), "1.23")

    def test_timestamp(self) -> None:
        self.assertEqual(format_timestamp(0), "never")
        moment = dt.datetime(2024, 1, 1, 12, 0, 0)
        epoch = int(moment.timestamp())
        self.assertEqual(format_timestamp(epoch, now=moment + dt.timedelta(hours=3)), "3 hours ago")

    def test_format_field_covers_every_key(self) -> None:
        job = Job(id=4, name="x", status=JobStatus.CHECKING)
        for key in SortKey:
            with self.subTest(key=key):
                self.assertIsInstance(format_field(job, key), str)
        self.assertEqual(format_field(job, SortKey.STATUS), "checking")
        self.assertEqual(format_field(job, SortKey.ID), "4")


class ThemeTests(unittest.TestCase):
    def test_resolve_known_and_unknown_names(self) -> None:
        self.assertIs(resolve_theme("ocean"), OCEAN_THEME)
        self.assertIs(resolve_theme(" OCEAN "), OCEAN_THEME)
        self.assertIs(resolve_theme("missing"), DEFAULT_THEME)
        self.assertIs(resolve_theme("ocean", no_color=True), PLAIN_THEME)
        self.assertEqual(available_theme_names(), ("default", "ocean"))

    def test_parse_hex_color(self) -> None:
        self.assertEqual(parse_hex_color("#ff8000"), (255, 128, 0))
        self.assertEqual(parse_hex_color("0f0"), (0, 255, 0))
        self.assertIsNone(parse_hex_color("#12345"))
        self.assertIsNone(parse_hex_color(7))

    def test_color_overrides_replace_slots(self) -> None:
        theme = apply_color_overrides(
            DEFAULT_THEME,
            {"fg_highlight": "#ffffff", "bg_column_hide": "#000080", "fg_normal": "#cccccc", "bg_highlight": "nope"},
        )
        self.assertEqual(theme.highlight, "\033[38;2;255;255;255m")
        self.assertEqual(theme.column_hide, "\033[48;2;0;0;128m")
        self.assertEqual(theme.normal, "\033[38;2;204;204;204m")
        self.assertEqual(theme.column_show, DEFAULT_THEME.column_show)

    def test_no_valid_overrides_returns_same_theme(self) -> None:
        self.assertIs(apply_color_overrides(DEFAULT_THEME, {"fg_highlight": "red"}), DEFAULT_THEME)
        self.assertEqual(resolve_theme(None, colors={"fg_highlight": "#fff"}).name, "default")


if __name__ == "__main__":
    unittest.main()
