#!/usr/bin/env python
# License: GPL v3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

from compact_bar.constants import ARROW_SEPARATOR
from compact_bar.keys import parse_map
from compact_bar.status import GroupControlsInfo
from compact_bar.tab_line import (
    as_text,
    left_more_message,
    line_width,
    populate_tabs_in_tab_line,
    render_tab,
    right_more_message,
    tab_at,
    tab_line,
    tab_line_prefix,
    tab_separator,
    tab_spans,
)
from compact_bar.types import InputMode, Span, Tab

from . import BaseTest, tabs_with_widths, uniform_tabs


def pack(tabs, active, cols, separator=''):
    return populate_tabs_in_tab_line(tabs[:active], tabs[active + 1:], [tabs[active]], cols, separator)


class TestTabLine(BaseTest):

    def test_collapse_indicators(self):
        self.ae(left_more_message(0, '', 3), Span())
        self.ae(right_more_message(0, ARROW_SEPARATOR, 3), Span())
        self.ae(left_more_message(3, '', 2), Span(' ← +3 ', 6, 2, 'collapsed'))
        self.ae(right_more_message(12, '', 7), Span(' +12 → ', 7, 7, 'collapsed'))
        q = left_more_message(1, ARROW_SEPARATOR, 0)
        self.ae(q.text, f'{ARROW_SEPARATOR} ← +1 {ARROW_SEPARATOR}')
        self.ae(q.width, 8)
        self.ae(right_more_message(9999, '', 1).text, ' +9999 → ')
        self.ae(right_more_message(10000, '', 1).text, ' +many → ')
        self.ae(left_more_message(123456, '', 1), Span(' ← +many ', 9, 1, 'collapsed'))

    def test_all_tabs_fit(self):
        tabs = uniform_tabs()
        for cols in (26, 30, 100):
            spans = pack(tabs, 2, cols)
            self.ae(self.tab_indices(spans), [0, 1, 2, 3, 4])
            self.ae(self.collapsed(spans), [])
            self.ae(line_width(spans), 25)

    def test_one_column_short_of_everything(self):
        # placing the fourth tab while the fifth is still hidden needs 26 columns
        spans = pack(uniform_tabs(), 2, 25)
        self.ae(self.tab_indices(spans), [0, 1, 2])
        self.ae(spans[-1], Span(' +2 → ', 6, 3, 'collapsed'))
        self.ae(line_width(spans), 21)

    def test_only_active_tab_fits(self):
        tabs = uniform_tabs()
        spans = pack(tabs, 2, 14)
        self.ae(spans, [tabs[2]])
        self.ae(line_width(spans), 5)
        spans = pack(tabs, 2, 17)
        self.ae([s.text for s in spans], [' ← +2 ', tabs[2].text, ' +2 → '])
        self.ae([s.tab_index for s in spans], [1, 2, 3])
        self.ae(line_width(spans), 17)

    def test_packer_balance(self):
        ' Tabs are taken alternately from the side that has accumulated the least width '
        spans = pack(uniform_tabs(11), 5, 40)
        self.ae(self.tab_indices(spans), [3, 4, 5, 6, 7])
        self.ae(spans[0], Span(' ← +3 ', 6, 2, 'collapsed'))
        self.ae(spans[-1], Span(' +3 → ', 6, 8, 'collapsed'))
        self.ae(line_width(spans), 37)

    def test_one_sided_fill(self):
        tabs = uniform_tabs(8)
        spans = pack(tabs, 0, 30)
        self.ae(spans[0], tabs[0])
        self.ae(self.collapsed(spans), [spans[-1]])
        self.ae(spans[-1].text, f' +{8 - len(self.tab_indices(spans))} → ')
        self.assert_fits(spans, 30)
        spans = pack(tabs, 7, 30)
        self.ae(spans[-1], tabs[7])
        self.ae(self.collapsed(spans), [spans[0]])
        self.assert_fits(spans, 30)

    def test_width_bound_and_active_tab(self):
        tabs = tabs_with_widths(3, 7, 4, 9, 5, 6, 2, 8, 1, 10)
        for active in range(len(tabs)):
            for cols in range(tabs[active].width, 70):
                spans = pack(tabs, active, cols)
                self.assert_fits(spans, cols)
                self.assertIn(tabs[active], spans)
                visible = self.tab_indices(spans)
                self.ae(visible, list(range(visible[0], visible[-1] + 1)), f'Visible tabs are not contiguous at {cols=} {active=}')
                for s in self.collapsed(spans):
                    if s is spans[0]:
                        self.ae(s.text, f' ← +{visible[0]} ')
                        self.ae(s.tab_index, visible[0] - 1)
                    else:
                        self.assertIs(s, spans[-1])
                        self.ae(s.text, f' +{len(tabs) - 1 - visible[-1]} → ')
                        self.ae(s.tab_index, visible[-1] + 1)

    def test_visible_count_grows_with_budget(self):
        ' Filling a single side with tabs of equal width, more columns never show fewer tabs '
        for width in (3, 5, 8):
            for count in range(1, 14):
                tabs = uniform_tabs(count, width)
                for active in {0, count - 1}:
                    counts = [len(self.tab_indices(pack(tabs, active, cols))) for cols in range(width, 120)]
                    self.ae(counts, sorted(counts), f'{width=} {count=} {active=}')
                    self.ae(counts[-1], count)
        counts = [len(self.tab_indices(pack(uniform_tabs(), 2, cols))) for cols in range(5, 50)]
        self.ae((counts.index(3) + 5, counts.index(5) + 5), (22, 26))

    def test_visible_count_can_shrink_with_budget(self):
        ' With tabs of differing widths one more column can change which side is filled first '
        tabs = tabs_with_widths(11, 3, 3, 9, 4, 1, 4)
        spans = pack(tabs, 4, 24)
        self.ae(self.tab_indices(spans), [3, 4, 5, 6])
        self.ae([s.text for s in self.collapsed(spans)], [' ← +3 '])
        spans = pack(tabs, 4, 25)
        self.ae(self.tab_indices(spans), [3, 4])
        self.ae([s.text for s in self.collapsed(spans)], [' ← +3 ', ' +2 → '])
        self.ae(line_width(spans), 25)

    def test_balance_with_equal_widths(self):
        '''
        While tabs stay hidden on both sides every step had both neighbours
        to choose from, so the left side leads by at most one tab
        '''
        checked = 0
        for width in (2, 5, 7):
            for count in range(3, 14):
                tabs = uniform_tabs(count, width)
                for active in range(1, count - 1):
                    for cols in range(width, 100):
                        visible = self.tab_indices(pack(tabs, active, cols))
                        if visible[0] == 0 or visible[-1] == count - 1:
                            continue
                        total_left = width * (active - visible[0])
                        total_right = width * (visible[-1] - active)
                        self.assertIn(total_left - total_right, (0, width), f'{width=} {count=} {active=} {cols=}')
                        checked += 1
        self.assertGreater(checked, 100)

    def test_balance_when_one_side_is_blocked(self):
        ' A neighbour too wide to fit leaves the other side to fill up alone '
        tabs = tabs_with_widths(20, 5, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1)
        spans = pack(tabs, 1, 20)
        self.ae(self.tab_indices(spans), [1, 2, 3, 4])
        self.ae([(s.text, s.tab_index) for s in self.collapsed(spans)], [(' ← +1 ', 0), (' +7 → ', 5)])
        self.ae(line_width(spans), 20)

    def test_packing_is_repeatable(self):
        tabs = tabs_with_widths(4, 6, 5, 3, 8)
        before, after, middle = tabs[:2], tabs[3:], [tabs[2]]
        originals = list(before), list(after), list(middle)
        first = populate_tabs_in_tab_line(before, after, middle, 19, ARROW_SEPARATOR)
        second = populate_tabs_in_tab_line(before, after, middle, 19, ARROW_SEPARATOR)
        self.ae(first, second)
        self.ae((before, after, middle), originals)

    def test_many_hidden_tabs(self):
        tabs = uniform_tabs(10001)
        spans = pack(tabs, 0, 14)
        self.ae(spans, [tabs[0], Span(' +many → ', 9, 1, 'collapsed')])
        spans = pack(uniform_tabs(10000), 0, 14)
        self.ae(spans[-1].text, ' +9999 → ')

    def test_render_tab(self):
        self.ae(render_tab('vim', 3, True), Span(' vim ', 5, 3, 'tab_active'))
        q = render_tab('vim', 0, False, ARROW_SEPARATOR)
        self.ae(q.text, f'{ARROW_SEPARATOR} vim {ARROW_SEPARATOR}')
        self.ae(q.width, 7)
        self.ae(q.style, 'tab_inactive')
        self.ae(render_tab('日本', 1, False).width, 6)
        self.ae(render_tab('a long title', 0, False, max_title_length=6).text, ' a lon… ')
        self.ae(render_tab('short', 0, False, max_title_length=6).text, ' short ')
        self.ae(render_tab('a\x07b  c\n', 0, False).text, ' ab c ')
        self.ae(tab_separator(), ARROW_SEPARATOR)
        self.ae(tab_separator(True), '')

    def test_measured_tabs(self):
        tabs = (Tab('one', 5, 0), Tab('two', 9, 1))
        self.ae(tab_spans(tabs, 1), [Span('one', 5, 0, 'tab_inactive'), Span('two', 9, 1, 'tab_active')])

    def test_prefix(self):
        spans = tab_line_prefix('main', InputMode.normal, 100)
        self.ae([s.text for s in spans], [' Zellij ', '(main)', ' NORMAL '])
        self.ae([s.style for s in spans], ['brand', 'session_name', 'mode_normal'])
        self.ae(line_width(spans), 22)
        self.ae(tab_line_prefix(None, InputMode.locked, 100), [Span(' Zellij ', 8, style='brand'), Span(' LOCKED ', 8, style='mode_locked')])
        self.ae(tab_line_prefix(None, InputMode.enter_search, 100)[-1], Span(' ENTERSEARCH ', 13, style='mode_other'))
        self.ae(tab_line_prefix('main', InputMode.normal, 4), [Span(' Zellij ', 8, style='brand')])
        self.ae(tab_line_prefix(None, InputMode.normal, 100, brand='AB')[0], Span('AB', 2, style='brand'))

    def test_prefix_parts_checked_independently(self):
        ' Both the session name and the mode are measured against the space left after the brand alone '
        spans = tab_line_prefix('abcdefgh', InputMode.normal, 16)
        self.ae([s.style for s in spans], ['brand', 'mode_normal'])
        spans = tab_line_prefix('ab', InputMode.normal, 16)
        self.ae([s.style for s in spans], ['brand', 'session_name', 'mode_normal'])
        self.ae(line_width(spans), 20)

    def test_full_line(self):
        tabs = uniform_tabs()
        spans = tab_line('main', tabs, 2, 100, active_swap_layout_name='base')
        self.ae(
            [s.style for s in spans],
            ['brand', 'session_name', 'mode_normal'] + ['tab_inactive'] * 5 + ['padding', 'swap_layout'])
        self.ae(spans[-2], Span(' ' * 44, 44, style='padding'))
        self.ae(spans[-1], Span(' BASE ', 9, style='swap_layout'))
        self.ae(line_width(spans), 100)
        self.ae(len(as_text(spans)), 97)

    def test_line_without_suffix(self):
        spans = tab_line('main', uniform_tabs(), 2, 100)
        self.ae(spans[-1].style, 'tab_inactive')
        self.ae(line_width(spans), 47)
        spans = tab_line('main', uniform_tabs(), 2, 100, hide_session_name=True)
        self.ae([s.style for s in spans[:2]], ['brand', 'mode_normal'])

    def test_active_tab_does_not_fit(self):
        spans = tab_line('main', uniform_tabs(), 2, 25, active_swap_layout_name='base')
        self.ae([s.style for s in spans], ['brand', 'session_name', 'mode_normal'])

    def test_no_tabs(self):
        spans = tab_line('s', [], 0, 40, active_swap_layout_name='x')
        self.ae([s.style for s in spans], ['brand', 'session_name', 'mode_normal', 'padding', 'swap_layout'])
        self.ae(spans[-2].width, 15)
        self.ae(line_width(spans), 40)

    def test_no_room_for_suffix(self):
        spans = tab_line(None, uniform_tabs(), 2, 42, active_swap_layout_name='base')
        self.ae(line_width(spans), 41)
        self.ae(spans[-1].style, 'tab_inactive')

    def test_group_controls_take_precedence(self):
        keymap = [parse_map('ctrl+g launch_plugin zellij:multiple-select'), parse_map('ctrl+t toggle_pane_in_group')]
        info = GroupControlsInfo(2, keymap)
        spans = tab_line('main', uniform_tabs(), 2, 120, active_swap_layout_name='base', group_controls=info)
        self.ae(spans[-1].style, 'group_controls')
        self.ae(spans[-2], Span('', 0, style='padding'))
        self.ae(line_width(spans), 120)
        # no tier fits and the swap layout is not used instead
        spans = tab_line('main', uniform_tabs(), 2, 60, active_swap_layout_name='base', group_controls=info)
        self.ae(spans[-1].style, 'tab_inactive')

    def test_tab_at(self):
        spans = pack(uniform_tabs(), 2, 25)
        self.ae([tab_at(spans, x) for x in (0, 4, 5, 14, 15, 20)], [0, 0, 1, 2, 3, 3])
        self.assertIsNone(tab_at(spans, 21))
        spans = tab_line('main', uniform_tabs(), 2, 100)
        self.assertIsNone(tab_at(spans, 0))
        self.ae(tab_at(spans, 22), 0)
        self.ae(tab_at(spans, 46), 4)

    def test_active_index_out_of_range(self):
        with self.assertRaises(AssertionError):
            tab_line('main', uniform_tabs(), 5, 100)
