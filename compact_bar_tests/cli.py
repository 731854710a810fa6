#!/usr/bin/env python
# License: GPL v3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

import json
from contextlib import redirect_stderr, redirect_stdout
from io import StringIO

from compact_bar.constants import ARROW_SEPARATOR as A
from compact_bar.main import main, option_parser
from compact_bar.types import InputMode

from . import BaseTest
from .main import find_all_tests, select_tests, suite_module_names


class TestMain(BaseTest):

    def run_main(self, *args):
        with redirect_stdout(StringIO()) as out:
            main(['-c', 'NONE'] + list(args))
        return out.getvalue()

    def test_plain_line(self):
        out = self.run_main('--cols', '60', '--session', 'main', '-o', 'simplified_ui=yes', 'one', 'two', 'three')
        self.ae(out, ' Zellij (main) NORMAL  one  two  three \n')
        out = self.run_main('--cols', '60', '--session', 'main', 'one', 'two', 'three')
        self.ae(out, f' Zellij (main) NORMAL {A} one {A}{A} two {A}{A} three {A}\n')

    def test_zero_columns(self):
        ' An explicit budget of zero leaves only the brand '
        self.ae(self.run_main('--cols', '0', '--session', 'main', 'one', 'two'), ' Zellij \n')
        out = self.run_main('--cols', '0', '--spans', 'one')
        self.ae([json.loads(line)['style'] for line in out.splitlines()], ['brand'])

    def test_spans(self):
        out = self.run_main('--cols', '40', '--spans', '--mode', 'locked', '--swap-layout', 'tiled', '-o', 'simplified_ui=yes', 'a', 'b')
        spans = [json.loads(line) for line in out.splitlines()]
        self.ae(spans[0], {'text': ' Zellij ', 'width': 8, 'tab_index': None, 'style': 'brand'})
        self.ae(spans[1]['style'], 'mode_locked')
        self.ae([s['tab_index'] for s in spans[2:4]], [0, 1])
        self.ae(spans[2]['style'], 'tab_active')
        self.ae(spans[-1], {'text': ' TILED ', 'width': 10, 'tab_index': None, 'style': 'swap_layout_locked'})
        self.ae(sum(s['width'] for s in spans), 40)

    def test_group_controls(self):
        out = self.run_main('--cols', '120', '--spans', '--grouped-panes', '2', '--marking', 'a')
        last = json.loads(out.splitlines()[-1])
        self.ae(last['style'], 'group_controls')
        self.assertIn('2 SELECTED PANES | Alt + ', last['text'])

    def test_arguments(self):
        args = option_parser().parse_args(['--mode', 'enter-search', 'x'])
        self.ae(args.mode, InputMode.enter_search)
        self.ae(args.titles, ['x'])
        with redirect_stderr(StringIO()), self.assertRaises(SystemExit):
            option_parser().parse_args(['--mode', 'nonsense'])
        with redirect_stderr(StringIO()) as err, self.assertRaises(SystemExit):
            main(['-c', 'NONE', '--active', '2', 'a', 'b'])
        self.assertIn('active tab index', err.getvalue())

    def test_test_selection(self):
        self.ae(suite_module_names(), [f'compact_bar_tests.{m}' for m in ('cli', 'config', 'keys', 'status', 'tab_line')])
        everything = find_all_tests()
        selected = select_tests(everything, ['zero_columns'])
        self.ae([t.id() for t in selected], ['compact_bar_tests.cli.TestMain.test_zero_columns'])
        self.ae(selected.countTestCases(), select_tests(everything, ['test_zero_columns'], 'cli').countTestCases())
        keys = select_tests(everything, module='keys')
        self.assertGreater(keys.countTestCases(), 0)
        self.assertTrue(all(t.id().startswith('compact_bar_tests.keys.') for t in keys))
        self.ae(select_tests(everything, ['zero_columns'], 'keys').countTestCases(), 0)
