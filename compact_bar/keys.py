#!/usr/bin/env python
# License: GPL v3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

import re
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import NamedTuple

from .constants import multiple_select_plugin
from .utils import log_error


class KeyModifier(Enum):
    ctrl = 'Ctrl'
    alt = 'Alt'
    shift = 'Shift'
    super = 'Super'


mod_map = {
    'CTRL': 'ctrl', 'CONTROL': 'ctrl', '⌃': 'ctrl',
    'ALT': 'alt', 'OPT': 'alt', 'OPTION': 'alt', '⌥': 'alt',
    'SHIFT': 'shift', '⇧': 'shift',
    'SUPER': 'super', 'CMD': 'super', 'COMMAND': 'super', '⌘': 'super',
}
character_key_name_aliases: dict[str, str] = {
    'PLUS': '+',
    'MINUS': '-',
    'HYPHEN': '-',
    'EQUAL': '=',
    'UNDERSCORE': '_',
    'COMMA': ',',
    'PERIOD': '.',
    'DOT': '.',
    'SLASH': '/',
    'BACKSLASH': '\\',
    'TILDE': '~',
    'GRAVE': '`',
    'SEMICOLON': ';',
    'COLON': ':',
    'BAR': '|',
    'PIPE': '|',
    'LEFT_BRACKET': '[',
    'RIGHT_BRACKET': ']',
}
functional_key_name_aliases: dict[str, str] = {
    'ESCAPE': 'ESC',
    'RETURN': 'ENTER',
    'PGUP': 'PAGEUP',
    'PAGE_UP': 'PAGEUP',
    'PGDN': 'PAGEDOWN',
    'PAGE_DOWN': 'PAGEDOWN',
    'DELETE': 'DEL',
    'ARROWUP': 'UP',
    'ARROWDOWN': 'DOWN',
    'ARROWRIGHT': 'RIGHT',
    'ARROWLEFT': 'LEFT',
    'SPC': 'SPACE',
}
action_name_pat = re.compile(r'[a-z][a-z0-9_]*$')


class InvalidMods(ValueError):
    pass


def sorted_modifiers(mods: Iterable[KeyModifier]) -> list[KeyModifier]:
    q = frozenset(mods)
    return [m for m in KeyModifier if m in q]


class KeyWithModifier(NamedTuple):
    key: str
    modifiers: frozenset[KeyModifier] = frozenset()

    def __str__(self) -> str:
        if not self.modifiers:
            return self.key
        return ' '.join(m.value for m in sorted_modifiers(self.modifiers)) + ' ' + self.key

    def strip_common_modifiers(self, common_modifiers: Iterable[KeyModifier]) -> 'KeyWithModifier':
        return self._replace(modifiers=self.modifiers - frozenset(common_modifiers))


class KeyAction(NamedTuple):
    func: str
    args: tuple[str, ...] = ()

    def __repr__(self) -> str:
        if self.args:
            return f'KeyAction({self.func!r}, {self.args!r})'
        return f'KeyAction({self.func!r})'

    def launches_plugin(self, url: str) -> bool:
        return self.func in ('launch_plugin', 'launch_or_focus_plugin') and bool(self.args) and self.args[0] == url


KeyMap = Sequence[tuple[KeyWithModifier, Sequence[KeyAction]]]


def parse_mods(parts: Iterable[str], sc: str) -> frozenset[KeyModifier] | None:
    mods: set[KeyModifier] = set()
    for m in parts:
        q = mod_map.get(m.strip().upper())
        if q is None:
            if m.upper() != 'NONE':
                log_error(f'Shortcut: {sc} has unknown modifier, ignoring')
            return None
        mods.add(KeyModifier[q])
    return frozenset(mods)


def parse_shortcut(sc: str) -> KeyWithModifier:
    sc = sc.strip()
    if sc.endswith('+') and len(sc) > 1:
        sc = f'{sc[:-1]}plus'
    parts = sc.split('+')
    mods: frozenset[KeyModifier] = frozenset()
    if len(parts) > 1:
        mods = parse_mods(parts[:-1], sc) or frozenset()
        if not mods:
            raise InvalidMods('Invalid shortcut')
    q = parts[-1]
    if not q:
        raise ValueError(f'Empty shortcut: {sc!r}')
    uq = q.upper()
    if uq in character_key_name_aliases:
        key = character_key_name_aliases[uq]
    elif len(q) == 1:
        key = q.lower()
    else:
        key = functional_key_name_aliases.get(uq, uq)
    return KeyWithModifier(key, mods)


def parse_action(text: str) -> KeyAction:
    parts = text.split()
    if not parts or action_name_pat.match(parts[0]) is None:
        raise ValueError(f'Invalid key action: {text!r}')
    return KeyAction(parts[0], tuple(parts[1:]))


def parse_map(val: str) -> tuple[KeyWithModifier, list[KeyAction]]:
    sc, _, action = val.strip().partition(' ')
    if not sc or not action.strip():
        raise ValueError(f'Invalid key mapping: {val!r}')
    actions = [parse_action(x) for x in action.split(';') if x.strip()]
    return parse_shortcut(sc), actions


def multiple_select_key(keymap: KeyMap) -> KeyWithModifier | None:
    for key, actions in keymap:
        if any(a.launches_plugin(multiple_select_plugin) for a in actions):
            return key
    return None


def single_action_key(keymap: KeyMap, action: KeyAction) -> KeyWithModifier | None:
    for key, actions in keymap:
        if actions and actions[0] == action:
            return key
    return None


def get_common_modifiers(keys: Sequence[KeyWithModifier]) -> list[KeyModifier]:
    if not keys:
        return []
    common = keys[-1].modifiers
    for key in keys[:-1]:
        common = common & key.modifiers
    return sorted_modifiers(common)
