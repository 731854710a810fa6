#!/usr/bin/env python
# License: GPL v3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

import os
import tempfile
from contextlib import redirect_stderr
from io import StringIO
from unittest.mock import patch

from compact_bar.conf.utils import BadLine, RecursiveInclude, logical_lines, parse_config_base, python_string, resolve_config, to_bool
from compact_bar.config import Options, create_result_dict, default_keymap, init_config, load_config, parse_conf_item
from compact_bar.constants import ARROW_SEPARATOR, config_dir, defconf
from compact_bar.keys import KeyAction, parse_shortcut

from . import BaseTest


class TestConfig(BaseTest):

    def setUp(self):
        self.tdir = tempfile.mkdtemp()

    def tearDown(self):
        import shutil
        shutil.rmtree(self.tdir)

    def write(self, name, text):
        path = os.path.join(self.tdir, name)
        with open(path, 'w') as f:
            f.write(text)
        return path

    def test_defaults(self):
        opts = load_config()
        self.ae(opts, Options())
        self.assertFalse(opts.simplified_ui)
        self.ae(opts.separator, ARROW_SEPARATOR)
        self.ae(opts.brand_label, ' Zellij ')
        self.ae(opts.map, default_keymap)
        self.ae(len(opts.map), 3)

    def test_value_parsers(self):
        self.assertTrue(to_bool('Yes'))
        self.assertFalse(to_bool('no'))
        self.ae(python_string(r'\x20Tabs\x20'), ' Tabs ')

    def test_overrides(self):
        opts = load_config(overrides=['simplified_ui yes', 'tab_title_max_length 12', r'brand_label \x20Tabs\x20'])
        self.assertTrue(opts.simplified_ui)
        self.ae(opts.separator, '')
        self.ae(opts.tab_title_max_length, 12)
        self.ae(opts.brand_label, ' Tabs ')
        opts = load_config(overrides=['map ctrl+g toggle_pane_in_group'])
        self.ae(len(opts.map), 4)
        self.ae(opts.map[0], (parse_shortcut('ctrl+g'), (KeyAction('toggle_pane_in_group'),)))
        opts = load_config(overrides=['clear_all_shortcuts yes', 'map ctrl+g toggle_pane_in_group'])
        self.ae(opts.map, ((parse_shortcut('ctrl+g'), (KeyAction('toggle_pane_in_group'),)),))

    def test_config_files(self):
        self.write('extra.conf', 'simplified_ui yes\nmap ctrl+g toggle_group_marking\n')
        first = self.write('first.conf', '''\
# a comment
hide_session_name yes
include extra.conf
tab_title_max_length 1
\\2
''')
        second = self.write('second.conf', 'hide_session_name no\n')
        missing = os.path.join(self.tdir, 'missing.conf')
        opts = load_config(first, missing, second)
        self.assertTrue(opts.simplified_ui)
        self.assertFalse(opts.hide_session_name)
        self.ae(opts.tab_title_max_length, 12)
        self.ae(opts.map[0][1], (KeyAction('toggle_group_marking'),))
        self.ae(opts.config_paths, (first, second))

    def test_bad_lines(self):
        ans = create_result_dict()
        bad: list[BadLine] = []
        with redirect_stderr(StringIO()) as err:
            parse_config_base(
                ['simplified_ui yes', 'tab_title_max_length x', 'map hyper+a new_tab', 'no_such_option 1', 'garbage'],
                parse_conf_item, ans, bad)
        self.assertTrue(ans['simplified_ui'])
        self.ae([b.number for b in bad], [2, 3])
        self.ae(bad[0].line, 'tab_title_max_length x')
        self.assertIsInstance(bad[0].exception, ValueError)
        self.assertIn('no_such_option', err.getvalue())
        self.assertIn('garbage', err.getvalue())
        self.assertRaises(ValueError, parse_config_base, ['tab_title_max_length x'], parse_conf_item, create_result_dict())

    def test_bad_lines_are_reported(self):
        path = self.write('bad.conf', 'tab_title_max_length abc\nhide_session_name yes\n')
        with redirect_stderr(StringIO()) as err:
            opts = load_config(path)
        self.assertTrue(opts.hide_session_name)
        self.ae(opts.tab_title_max_length, 0)
        self.assertIn(f'{path}:1', err.getvalue())
        self.assertIn("'tab_title_max_length abc'", err.getvalue())

    def test_recursive_include(self):
        path = self.write('loop.conf', 'include loop.conf\nhide_session_name yes\n')
        with redirect_stderr(StringIO()) as err:
            opts = load_config(path)
        self.assertTrue(opts.hide_session_name)
        self.assertIn('already been included', err.getvalue())

    def test_includes(self):
        self.write('child.conf', 'tab_title_max_length oops\n')
        self.write('b.conf', 'include a.conf\nsimplified_ui yes\n')
        path = self.write('a.conf', 'include missing.conf\ninclude child.conf\ninclude b.conf\nhide_session_name yes\n')
        ans = create_result_dict()
        bad: list[BadLine] = []
        with redirect_stderr(StringIO()) as err:
            with open(path) as f:
                parse_config_base(f, parse_conf_item, ans, bad)
        self.assertIn('missing.conf', err.getvalue())
        self.assertTrue(ans['hide_session_name'])
        self.assertTrue(ans['simplified_ui'])
        self.ae([(os.path.basename(b.file), b.number) for b in bad], [('child.conf', 1), ('b.conf', 1)])
        self.assertIsInstance(bad[1].exception, RecursiveInclude)

    def test_continuation_lines(self):
        self.ae(list(logical_lines(['a 1\n', '  \\2\n', '\\3\n', 'b 4\n', '\\5'])), [(1, 'a 123'), (4, 'b 45')])

    def test_resolve_config(self):
        self.ae(list(resolve_config('/sys.conf', '/def.conf')), ['/sys.conf', '/def.conf'])
        self.ae(list(resolve_config('/sys.conf', '/def.conf', ['a.conf'])), ['/sys.conf', 'a.conf'])
        self.ae(list(resolve_config('/sys.conf', '/def.conf', ['a.conf', 'NONE'])), [])

    def test_init_config(self):
        opts = init_config(['NONE'], ['simplified_ui=yes', 'brand_label=X'])
        self.assertTrue(opts.simplified_ui)
        self.ae(opts.brand_label, 'X')
        self.ae(opts.config_paths, ())
        path = self.write('cli.conf', 'hide_session_name yes\n')
        opts = init_config([path])
        self.assertTrue(opts.hide_session_name)
        self.assertIn(path, opts.config_paths)

    def test_config_dir(self):
        config_dir.clear_cached()
        try:
            with patch.dict(os.environ, {'COMPACT_BAR_CONFIG_DIRECTORY': self.tdir}):
                self.ae(config_dir(), self.tdir)
                self.ae(defconf(), os.path.join(self.tdir, 'compact_bar.conf'))
            config_dir.clear_cached()
            env = {k: v for k, v in os.environ.items() if k != 'COMPACT_BAR_CONFIG_DIRECTORY'}
            env['XDG_CONFIG_HOME'] = self.tdir
            with patch.dict(os.environ, env, clear=True):
                self.ae(config_dir(), os.path.join(self.tdir, 'compact_bar'))
        finally:
            config_dir.clear_cached()
