#!/usr/bin/env python
# License: GPL v3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

from compact_bar.config import default_keymap
from compact_bar.constants import ARROW_SEPARATOR, RIBBON_EDGE
from compact_bar.keys import parse_map
from compact_bar.status import GroupControlsInfo, controls_tiers, group_control_keys, render_group_controls, swap_layout_status
from compact_bar.types import Highlight, InputMode, Span

from . import BaseTest

E = RIBBON_EDGE


def keymap(*lines):
    return [parse_map(x) for x in lines]


ctrl_keymap = keymap(
    'ctrl+a launch_plugin zellij:multiple-select',
    'ctrl+b toggle_pane_in_group',
    'ctrl+c toggle_group_marking',
)


class TestStatus(BaseTest):

    def test_swap_layout(self):
        self.assertIsNone(swap_layout_status(100, None, False, InputMode.normal))
        self.ae(swap_layout_status(8, 'foo', False, InputMode.normal), Span(' FOO ', 8, style='swap_layout'))
        self.ae(swap_layout_status(100, 'foo', True, InputMode.normal).style, 'swap_layout_damaged')
        self.ae(swap_layout_status(100, 'foo', True, InputMode.locked).style, 'swap_layout_locked')
        q = swap_layout_status(10, 'foo', False, InputMode.pane, ARROW_SEPARATOR)
        self.ae(q, Span(f'{ARROW_SEPARATOR} FOO {ARROW_SEPARATOR}', 10, style='swap_layout'))
        self.assertIsNone(swap_layout_status(9, 'foo', False, InputMode.pane, ARROW_SEPARATOR))

    def test_swap_layout_dropped_when_too_wide(self):
        ' A swap layout name that does not fit is dropped, never truncated '
        self.assertIsNone(swap_layout_status(7, 'foo', False, InputMode.locked))
        self.assertIsNone(swap_layout_status(7, 'foo', False, InputMode.normal))
        self.assertIsNone(swap_layout_status(0, 'foo', False, InputMode.normal))
        self.ae(swap_layout_status(8, 'foo', False, InputMode.locked).width, 8)

    def test_group_control_keys(self):
        self.ae(group_control_keys(ctrl_keymap), ('Ctrl + ', ('a', 'b', 'c')))
        self.ae(group_control_keys(default_keymap), ('Alt + ', ('p', 'Shift p', 'Shift f')))
        self.ae(group_control_keys(()), ('', ('UNBOUND', 'UNBOUND', 'UNBOUND')))
        km = keymap('ctrl+alt+a launch_or_focus_plugin zellij:multiple-select', 'alt+ctrl+b toggle_pane_in_group')
        self.ae(group_control_keys(km), ('Ctrl-Alt + ', ('a', 'b', 'UNBOUND')))
        km = keymap('alt+a launch_plugin zellij:multiple-select', 'ctrl+b toggle_pane_in_group', 'ctrl+c toggle_group_marking')
        self.ae(group_control_keys(km), ('', ('Alt a', 'Ctrl b', 'Ctrl c')))

    def test_first_binding_wins(self):
        km = keymap(
            'ctrl+x launch_plugin some:other-plugin',
            'ctrl+y new_tab ; toggle_pane_in_group',
            'ctrl+b toggle_pane_in_group',
            'ctrl+z toggle_pane_in_group',
            'ctrl+a launch_plugin zellij:multiple-select',
        )
        self.ae(group_control_keys(km), ('Ctrl + ', ('a', 'b', 'UNBOUND')))

    def test_controls_tiers(self):
        tiers = list(controls_tiers(3, ('a', 'b', 'c'), 'Ctrl + '))
        self.ae([t.width for t in tiers], [88, 64, 42])
        self.ae(tiers[0].selected_panes_text, '3 SELECTED PANES |')
        self.ae(tiers[1].group_mark_toggle_text, '<c> Follow')
        self.ae(tiers[2][:4], ('3 SELECTED |', '<a>', '<b>', '<c>'))
        tiers = list(controls_tiers(3, ('a', 'b', 'c')))
        self.ae(tiers[2].selected_panes_text, '3 SELECTED')
        self.ae(tiers[2].width, 33)

    def test_short_controls_with_common_modifier(self):
        ' Shared modifiers are shown once, ahead of the bare keys '
        q = render_group_controls(GroupControlsInfo(3, ctrl_keymap), 42)
        self.ae(q.text, f'3 SELECTED | Ctrl + {E} <a> {E}{E} <b> {E}{E} <c> {E} ')
        self.ae(q.width, 42)
        self.ae(q.style, 'group_controls')
        self.ae(q.highlights, (
            Highlight(0, 10, 'emphasis_3'),
            Highlight(13, 20, 'emphasis_0'),
            Highlight(23, 24, 'emphasis_0'),
            Highlight(30, 31, 'emphasis_0'),
            Highlight(37, 38, 'emphasis_0'),
        ))

    def test_controls_fill_available_space(self):
        q = render_group_controls(GroupControlsInfo(3, ctrl_keymap), 50)
        self.ae(q.width, 50)
        self.ae(len(q.text), 50)
        self.assertTrue(q.text.startswith(' ' * 8 + '3 SELECTED |'))
        self.ae(q.highlights[0], Highlight(8, 18, 'emphasis_3'))
        q = render_group_controls(GroupControlsInfo(3, ctrl_keymap), 64)
        self.assertIn('<a> Actions', q.text)
        self.ae(len(q.text), 64)
        q = render_group_controls(GroupControlsInfo(3, ctrl_keymap), 88)
        self.ae(q.text, f'3 SELECTED PANES | Ctrl + {E} <a> Group Actions {E}{E} <b> Toggle Group {E}{E} <c> Follow Focus {E} ')

    def test_controls_do_not_fit(self):
        self.assertIsNone(render_group_controls(GroupControlsInfo(3, ctrl_keymap), 41))
        self.assertIsNone(render_group_controls(GroupControlsInfo(3, ctrl_keymap), 0))

    def test_controls_while_marking(self):
        q = render_group_controls(GroupControlsInfo(3, ctrl_keymap, currently_marking_pane_group=True), 42)
        self.ae(q.highlights[-2:], (Highlight(34, 41, 'selected'), Highlight(37, 38, 'emphasis_0')))

    def test_unbound_controls(self):
        q = render_group_controls(GroupControlsInfo(1), 100)
        self.ae(q.text.lstrip(), f'1 SELECTED PANES {E} <UNBOUND> Group Actions {E}{E} <UNBOUND> Toggle Group {E}{E} <UNBOUND> Follow Focus {E} ')
        self.ae(q.highlights[0], Highlight(3, 19, 'emphasis_3'))
