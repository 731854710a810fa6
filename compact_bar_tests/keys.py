#!/usr/bin/env python
# License: GPL v3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

from contextlib import redirect_stderr
from io import StringIO

from compact_bar.keys import (
    InvalidMods,
    KeyAction,
    KeyModifier,
    KeyWithModifier,
    get_common_modifiers,
    multiple_select_key,
    parse_map,
    parse_shortcut,
    single_action_key,
)

from . import BaseTest

ctrl, alt, shift, super_ = KeyModifier.ctrl, KeyModifier.alt, KeyModifier.shift, KeyModifier.super


def kwm(key, *mods):
    return KeyWithModifier(key, frozenset(mods))


class TestKeys(BaseTest):

    def test_parse_shortcut(self):
        self.ae(parse_shortcut('ctrl+alt+p'), kwm('p', ctrl, alt))
        self.ae(parse_shortcut('Control+Shift+Escape'), kwm('ESC', ctrl, shift))
        self.ae(parse_shortcut('cmd+opt+A'), kwm('a', super_, alt))
        self.ae(parse_shortcut('ctrl++'), kwm('+', ctrl))
        self.ae(parse_shortcut('alt+minus'), kwm('-', alt))
        self.ae(parse_shortcut('f1'), kwm('F1'))
        self.ae(parse_shortcut(' pgup '), kwm('PAGEUP'))
        self.ae(parse_shortcut('x'), kwm('x'))

    def test_invalid_shortcuts(self):
        with redirect_stderr(StringIO()) as err:
            self.assertRaises(InvalidMods, parse_shortcut, 'hyper+a')
        self.assertIn('unknown modifier', err.getvalue())
        self.assertRaises(ValueError, parse_shortcut, '')

    def test_key_display(self):
        self.ae(str(kwm('p')), 'p')
        self.ae(str(kwm('p', alt, ctrl)), 'Ctrl Alt p')
        self.ae(str(kwm('ENTER', super_, shift)), 'Shift Super ENTER')
        self.ae(kwm('p', alt, ctrl).strip_common_modifiers([ctrl]), kwm('p', alt))
        self.ae(kwm('p', ctrl).strip_common_modifiers((ctrl, alt)), kwm('p'))

    def test_parse_map(self):
        self.ae(
            parse_map('ctrl+p launch_plugin zellij:multiple-select'),
            (kwm('p', ctrl), [KeyAction('launch_plugin', ('zellij:multiple-select',))]))
        self.ae(
            parse_map('alt+g  new_tab ; toggle_pane_in_group'),
            (kwm('g', alt), [KeyAction('new_tab'), KeyAction('toggle_pane_in_group')]))
        self.assertRaises(ValueError, parse_map, 'ctrl+p')
        self.assertRaises(ValueError, parse_map, 'ctrl+p NotAnAction')
        self.assertRaises(ValueError, parse_map, '')

    def test_binding_lookup(self):
        km = [
            parse_map('ctrl+x launch_plugin zellij:session-manager'),
            parse_map('ctrl+m launch_or_focus_plugin zellij:multiple-select'),
            parse_map('ctrl+t toggle_pane_in_group'),
        ]
        self.ae(multiple_select_key(km), kwm('m', ctrl))
        self.ae(single_action_key(km, KeyAction('toggle_pane_in_group')), kwm('t', ctrl))
        self.assertIsNone(single_action_key(km, KeyAction('toggle_group_marking')))
        self.assertIsNone(multiple_select_key(km[:1]))
        self.assertTrue(KeyAction('launch_plugin', ('zellij:multiple-select',)).launches_plugin('zellij:multiple-select'))
        self.assertFalse(KeyAction('launch_plugin').launches_plugin('zellij:multiple-select'))

    def test_common_modifiers(self):
        self.ae(get_common_modifiers([]), [])
        self.ae(get_common_modifiers([kwm('a', alt, ctrl), kwm('b', ctrl, alt, shift)]), [ctrl, alt])
        self.ae(get_common_modifiers([kwm('a', alt), kwm('b', ctrl)]), [])
        self.ae(get_common_modifiers([kwm('a', super_, shift)]), [shift, super_])
