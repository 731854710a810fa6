#!/usr/bin/env python
# License: GPL v3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

from collections.abc import Callable, Iterable, Sequence
from typing import Any, NamedTuple

from .conf.utils import BadLine, load_config as _load_config, parse_config_base, positive_int, python_string, resolve_config, to_bool
from .constants import appname, default_brand_label, defconf
from .keys import KeyAction, KeyWithModifier, parse_map
from .tab_line import tab_separator
from .utils import log_error

KeyDefinition = tuple[KeyWithModifier, tuple[KeyAction, ...]]
SYSTEM_CONF = f'/etc/xdg/{appname}/{appname}.conf'
default_map_lines = (
    'alt+p launch_plugin zellij:multiple-select',
    'alt+shift+p toggle_pane_in_group',
    'alt+shift+f toggle_group_marking',
)


def as_key_definition(val: str) -> KeyDefinition:
    key, actions = parse_map(val)
    return key, tuple(actions)


default_keymap = tuple(as_key_definition(x) for x in default_map_lines)


class Options(NamedTuple):
    simplified_ui: bool = False
    hide_session_name: bool = False
    brand_label: str = default_brand_label
    tab_title_max_length: int = 0
    map: tuple[KeyDefinition, ...] = default_keymap
    config_paths: tuple[str, ...] = ()

    @property
    def separator(self) -> str:
        return tab_separator(self.simplified_ui)


defaults = Options()
option_parsers: dict[str, Callable[[str], Any]] = {
    'simplified_ui': to_bool,
    'hide_session_name': to_bool,
    'brand_label': python_string,
    'tab_title_max_length': positive_int,
}


def create_result_dict() -> dict[str, Any]:
    return {'map': []}


def parse_conf_item(key: str, val: str, ans: dict[str, Any]) -> bool:
    if key == 'map':
        ans['map'].append(as_key_definition(val))
        return True
    if key == 'clear_all_shortcuts':
        if to_bool(val):
            ans['map'] = []
            ans['clear_all_shortcuts'] = True
        return True
    parser = option_parsers.get(key)
    if parser is None:
        return False
    ans[key] = parser(val.strip())
    return True


def merge_result_dicts(defaults: dict[str, Any], vals: dict[str, Any]) -> dict[str, Any]:
    ans = defaults.copy()
    for k, v in vals.items():
        if k == 'map':
            # later definitions take precedence, lookups use the first match
            ans['map'] = list(v) if vals.get('clear_all_shortcuts') else list(v) + list(ans.get('map', ()))
        elif k != 'clear_all_shortcuts':
            ans[k] = v
    return ans


def report_bad_lines(bad_lines: Sequence[BadLine]) -> None:
    for bad in bad_lines:
        where = f'{bad.file}:{bad.number}' if bad.file else f'line {bad.number}'
        log_error(f'Ignoring bad config line at {where}: {bad.line!r} with error: {bad.exception}')


def load_config(*paths: str, overrides: Iterable[str] | None = None) -> Options:

    def parse_config(lines: Iterable[str]) -> dict[str, Any]:
        ans = create_result_dict()
        bad_lines: list[BadLine] = []
        parse_config_base(lines, parse_conf_item, ans, bad_lines)
        report_bad_lines(bad_lines)
        return ans

    overrides = tuple(overrides) if overrides is not None else ()
    opts_dict, found_paths = _load_config(defaults._asdict(), parse_config, merge_result_dicts, *paths, overrides=overrides)
    opts_dict['map'] = tuple(opts_dict['map'])
    opts_dict['config_paths'] = found_paths
    return Options(**opts_dict)


def init_config(config_files: Sequence[str] = (), overrides: Iterable[str] = ()) -> Options:
    paths = tuple(resolve_config(SYSTEM_CONF, defconf(), config_files))
    return load_config(*paths, overrides=(a.replace('=', ' ', 1) for a in overrides))
