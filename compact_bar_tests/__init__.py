#!/usr/bin/env python
# License: GPL v3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

from collections.abc import Sequence
from unittest import TestCase

from compact_bar.tab_line import line_width
from compact_bar.types import Span


def uniform_tabs(count: int = 5, width: int = 5) -> list[Span]:
    return [Span(f'{i}'.center(width), width, i, 'tab_inactive') for i in range(count)]


def tabs_with_widths(*widths: int) -> list[Span]:
    return [Span('x' * w, w, i, 'tab_inactive') for i, w in enumerate(widths)]


class BaseTest(TestCase):

    ae = TestCase.assertEqual
    maxDiff = 2048

    def assert_fits(self, spans: Sequence[Span], cols: int) -> None:
        self.assertLessEqual(line_width(spans), cols, f'Line is wider than {cols}: {spans!r}')

    def tab_indices(self, spans: Sequence[Span]) -> list[int]:
        return [s.tab_index for s in spans if s.tab_index is not None and s.style != 'collapsed']

    def collapsed(self, spans: Sequence[Span]) -> list[Span]:
        return [s for s in spans if s.style == 'collapsed']
