#!/usr/bin/env python
# License: GPL v3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

from collections.abc import Iterator
from typing import NamedTuple

from .constants import RIBBON_EDGE, ribbon_paddings_len, unbound_key_label
from .keys import KeyAction, KeyMap, get_common_modifiers, multiple_select_key, single_action_key
from .types import Highlight, InputMode, Span
from .utils import wcswidth


def swap_layout_status(
    max_len: int,
    swap_layout_name: str | None,
    is_swap_layout_damaged: bool,
    input_mode: InputMode,
    separator: str = '',
) -> Span | None:
    '''
    The name of the active swap layout, drawn as a ribbon. Dropped entirely
    rather than truncated when there is no room for it.
    '''
    if swap_layout_name is None:
        return None
    name = f' {swap_layout_name} '.upper()
    if input_mode is InputMode.locked:
        style = 'swap_layout_locked'
    elif is_swap_layout_damaged:
        style = 'swap_layout_damaged'
    else:
        style = 'swap_layout'
    text = separator + name + separator
    full_len = wcswidth(name) + 2 * wcswidth(separator) + 3
    short_len = full_len + 1  # 1 is the space between
    if full_len <= max_len:
        return Span(text, full_len, style=style)
    if short_len <= max_len and input_mode is not InputMode.locked:
        return Span(text, short_len, style=style)
    return None


class GroupControlsInfo(NamedTuple):
    grouped_pane_count: int
    keymap: KeyMap = ()
    currently_marking_pane_group: bool = False


class ControlsTier(NamedTuple):
    selected_panes_text: str
    group_actions_text: str
    toggle_group_text: str
    group_mark_toggle_text: str
    width: int


def controls_tiers(grouped_pane_count: int, key_labels: tuple[str, str, str], common_modifier_text: str = '') -> Iterator[ControlsTier]:
    ' The textual forms of the group controls, most verbose first '
    ms, tg, gm = key_labels
    suffix = ' |' if common_modifier_text else ''
    for selected, *controls in (
        (f'{grouped_pane_count} SELECTED PANES', f'<{ms}> Group Actions', f'<{tg}> Toggle Group', f'<{gm}> Follow Focus'),
        (f'{grouped_pane_count} SELECTED', f'<{ms}> Actions', f'<{tg}> Toggle', f'<{gm}> Follow'),
        (f'{grouped_pane_count} SELECTED', f'<{ms}>', f'<{tg}>', f'<{gm}>'),
    ):
        selected += suffix
        # 1 for the space after the selected count and 1 for the end padding
        width = len(selected) + 1 + len(common_modifier_text) + sum(map(len, controls)) + ribbon_paddings_len + 1
        yield ControlsTier(selected, controls[0], controls[1], controls[2], width)


def group_control_keys(keymap: KeyMap) -> tuple[str, tuple[str, str, str]]:
    keys = (
        multiple_select_key(keymap),
        single_action_key(keymap, KeyAction('toggle_pane_in_group')),
        single_action_key(keymap, KeyAction('toggle_group_marking')),
    )
    common_modifiers = get_common_modifiers([k for k in keys if k is not None])
    ms, tg, gm = (unbound_key_label if k is None else str(k.strip_common_modifiers(common_modifiers)) for k in keys)
    common_modifier_text = f'{"-".join(m.value for m in common_modifiers)} + ' if common_modifiers else ''
    return common_modifier_text, (ms, tg, gm)


def render_group_controls(info: GroupControlsInfo, max_len: int) -> Span | None:
    common_modifier_text, key_labels = group_control_keys(info.keymap)
    for tier in controls_tiers(info.grouped_pane_count, key_labels, common_modifier_text):
        if tier.width <= max_len:
            break
    else:
        return None

    parts: list[str] = [' ' * (max_len - tier.width)]
    highlights: list[Highlight] = []
    pos = len(parts[0])

    def add(text: str, *ranges: tuple[int, int, str]) -> None:
        nonlocal pos
        for start, stop, role in ranges:
            highlights.append(Highlight(pos + start, pos + stop, role))
        parts.append(text)
        pos += len(text)

    selected = tier.selected_panes_text
    add(selected, (0, len(selected) - (2 if common_modifier_text else 0), 'emphasis_3'))
    add(' ')
    if common_modifier_text:
        add(common_modifier_text, (0, len(common_modifier_text), 'emphasis_0'))
    ribbons = (
        (tier.group_actions_text, key_labels[0], False),
        (tier.toggle_group_text, key_labels[1], False),
        (tier.group_mark_toggle_text, key_labels[2], info.currently_marking_pane_group),
    )
    for control, key, is_selected in ribbons:
        ribbon = f'{RIBBON_EDGE} {control} {RIBBON_EDGE}'
        # the key sits right after the opening bracket
        key_start = len(RIBBON_EDGE) + 2
        ranges = [(key_start, key_start + len(key), 'emphasis_0')]
        if is_selected:
            ranges.insert(0, (0, len(ribbon), 'selected'))
        add(ribbon, *ranges)
    add(' ')
    return Span(''.join(parts), max_len, style='group_controls', highlights=tuple(highlights))
