#!/usr/bin/env python
# License: GPL v3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

from collections.abc import Iterable, Sequence

from .constants import ARROW_SEPARATOR, default_brand_label, max_hidden_tab_count
from .status import GroupControlsInfo, render_group_controls, swap_layout_status
from .types import InputMode, Span, Tab
from .utils import sanitize_title, truncate_to_width, wcswidth


def tab_separator(simplified_ui: bool = False) -> str:
    return '' if simplified_ui else ARROW_SEPARATOR


def line_width(spans: Iterable[Span]) -> int:
    return sum(s.width for s in spans)


def render_tab(title: str, index: int, is_active: bool, separator: str = '', max_title_length: int = 0) -> Span:
    title = sanitize_title(title)
    if max_title_length > 0:
        title = truncate_to_width(title, max_title_length)
    text = f'{separator} {title} {separator}'
    return Span(text, wcswidth(text), index, 'tab_active' if is_active else 'tab_inactive')


def tab_spans(tabs: Iterable[Tab], active_tab_index: int) -> list[Span]:
    ' Spans for tabs whose widths have already been measured by the host '
    return [Span(t.title, t.width, t.index, 'tab_active' if t.index == active_tab_index else 'tab_inactive') for t in tabs]


def more_message(text: str, separator: str, tab_index: int) -> Span:
    # the separator is drawn on both sides of the text
    return Span(separator + text + separator, wcswidth(text) + 2 * wcswidth(separator), tab_index, 'collapsed')


def left_more_message(tab_count_to_the_left: int, separator: str, tab_index: int) -> Span:
    if tab_count_to_the_left == 0:
        return Span()
    if tab_count_to_the_left < max_hidden_tab_count:
        text = f' ← +{tab_count_to_the_left} '
    else:
        text = ' ← +many '
    return more_message(text, separator, tab_index)


def right_more_message(tab_count_to_the_right: int, separator: str, tab_index: int) -> Span:
    if tab_count_to_the_right == 0:
        return Span()
    if tab_count_to_the_right < max_hidden_tab_count:
        text = f' +{tab_count_to_the_right} → '
    else:
        text = ' +many → '
    return more_message(text, separator, tab_index)


def populate_tabs_in_tab_line(
    tabs_before_active: Sequence[Span],
    tabs_after_active: Sequence[Span],
    tabs_to_render: Sequence[Span],
    cols: int,
    separator: str = '',
) -> list[Span]:
    '''
    Move tabs from either side of the active tab into the rendered middle for
    as long as they fit in cols, pulling from whichever side has the least
    accumulated width. Tabs that are left over are summarized by collapse
    indicators at the ends, when those fit.
    '''
    before, after, middle = list(tabs_before_active), list(tabs_after_active), list(tabs_to_render)
    middle_size = line_width(middle)
    total_left = total_right = 0
    while True:
        left_count, right_count = len(before), len(after)
        # point at the hidden tabs closest to the visible ones
        collapsed_left = left_more_message(left_count, separator, before[-1].tab_index if before else 0)
        collapsed_right = right_more_message(right_count, separator, after[0].tab_index if after else 0)
        total_size = collapsed_left.width + middle_size + collapsed_right.width
        if total_size > cols:
            break

        # taking the last tab of a side also removes its collapse indicator
        left_fits = right_fits = False
        if before:
            size_by_adding_left = before[-1].width + total_size - (collapsed_left.width if left_count == 1 else 0)
            left_fits = size_by_adding_left <= cols
        if after:
            size_by_adding_right = after[0].width + total_size - (collapsed_right.width if right_count == 1 else 0)
            right_fits = size_by_adding_right <= cols

        if (total_left <= total_right or not right_fits) and left_fits:
            tab = before.pop()
            middle_size += tab.width
            total_left += tab.width
            middle.insert(0, tab)
        elif right_fits:
            tab = after.pop(0)
            middle_size += tab.width
            total_right += tab.width
            middle.append(tab)
        else:
            if collapsed_left.width:
                middle.insert(0, collapsed_left)
            if collapsed_right.width:
                middle.append(collapsed_right)
            break
    return middle


def tab_line_prefix(session_name: str | None, mode: InputMode, cols: int, brand: str = default_brand_label) -> list[Span]:
    brand_len = len(brand)
    parts = [Span(brand, brand_len, style='brand')]
    # Both optional parts are checked against the space left after the brand
    # only, not against each other
    available = max(0, cols - brand_len)
    if session_name is not None:
        name_part = f'({session_name})'
        name_part_len = wcswidth(name_part)
        if available >= name_part_len:
            parts.append(Span(name_part, name_part_len, style='session_name'))
    mode_part = f' {mode.value.upper()} '
    mode_part_len = wcswidth(mode_part)
    if mode is InputMode.locked:
        style = 'mode_locked'
    elif mode is InputMode.normal:
        style = 'mode_normal'
    else:
        style = 'mode_other'
    if available >= mode_part_len:
        parts.append(Span(mode_part, mode_part_len, style=style))
    return parts


def tab_line(
    session_name: str | None,
    all_tabs: Sequence[Span],
    active_tab_index: int,
    cols: int,
    separator: str = '',
    hide_session_name: bool = False,
    mode: InputMode = InputMode.normal,
    active_swap_layout_name: str | None = None,
    is_swap_layout_dirty: bool = False,
    group_controls: GroupControlsInfo | None = None,
    brand: str = default_brand_label,
) -> list[Span]:
    prefix = tab_line_prefix(None if hide_session_name else session_name, mode, cols, brand)
    if all_tabs:
        assert 0 <= active_tab_index < len(all_tabs), f'Active tab index {active_tab_index} out of range for {len(all_tabs)} tabs'
        active_tab = all_tabs[active_tab_index]
        # if the active tab alone won't fit in cols, don't draw any tabs
        if line_width(prefix) + active_tab.width > cols:
            return prefix
        prefix += populate_tabs_in_tab_line(
            all_tabs[:active_tab_index], all_tabs[active_tab_index + 1:], [active_tab],
            max(0, cols - line_width(prefix)), separator)

    current_title_len = line_width(prefix)
    if current_title_len < cols:
        remaining_space = cols - current_title_len
        if group_controls is not None:
            right_side_component = render_group_controls(group_controls, remaining_space)
        else:
            right_side_component = swap_layout_status(
                remaining_space, active_swap_layout_name, is_swap_layout_dirty, mode, separator)
        if right_side_component is not None:
            remaining_space = max(0, remaining_space - right_side_component.width)
            prefix.append(Span(' ' * remaining_space, remaining_space, style='padding'))
            prefix.append(right_side_component)
    return prefix


def tab_at(spans: Iterable[Span], x: int) -> int | None:
    ' The index of the tab drawn at column x, if any '
    pos = 0
    for s in spans:
        if pos <= x < pos + s.width:
            return s.tab_index
        pos += s.width
    return None


def as_text(spans: Iterable[Span]) -> str:
    return ''.join(s.text for s in spans)
