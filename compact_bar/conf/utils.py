#!/usr/bin/env python
# License: GPL v3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

import os
import re
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any, NamedTuple

from ..constants import config_dir
from ..utils import expandvars, log_error

key_pat = re.compile(r'([a-zA-Z][a-zA-Z0-9_-]*)\s+(.+)$')
ItemParser = Callable[[str, str, dict[str, Any]], bool]


class BadLine(NamedTuple):
    number: int
    line: str
    exception: Exception
    file: str


class RecursiveInclude(ValueError):
    pass


def positive_int(x: str | int) -> int:
    return max(0, int(x))


def to_bool(x: str) -> bool:
    return x.lower() in ('y', 'yes', 'true')


def python_string(text: str) -> str:
    ' Interpret backslash escapes the way a python string literal would '
    from ast import literal_eval
    ans: str = literal_eval("'''" + text.replace("'''", "'\\''") + "'''")
    return ans


def logical_lines(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    '''
    Yield (line number, text) for every logical line. A line whose first non
    blank character is a backslash continues the line before it, the number
    reported is that of the first physical line.
    '''
    parts: list[str] = []
    first = 0
    for number, raw in enumerate(lines, start=1):
        text = raw.lstrip().rstrip('\n')
        if parts and text.startswith('\\'):
            parts.append(text[1:])
            continue
        if parts:
            yield first, ''.join(parts)
        parts, first = [text], number
    if parts:
        yield first, ''.join(parts)


class ConfigParser:

    def __init__(self, parse_conf_item: ItemParser, ans: dict[str, Any], bad_lines: list[BadLine] | None = None):
        self.parse_conf_item = parse_conf_item
        self.ans = ans
        self.bad_lines = bad_lines
        self.included: set[str] = set()

    def parse(self, lines: Iterable[str], path: str = '') -> None:
        base_dir = config_dir()
        if path:
            path = os.path.abspath(path)
            base_dir = os.path.dirname(path)
            self.included.add(os.path.normpath(path))
        for number, line in logical_lines(lines):
            try:
                self.parse_line(line, base_dir)
            except Exception as e:
                if self.bad_lines is None:
                    raise
                self.bad_lines.append(BadLine(number, line.rstrip(), e, path))

    def parse_line(self, line: str, base_dir: str) -> None:
        line = line.strip()
        if not line or line.startswith('#'):
            return
        m = key_pat.match(line)
        if m is None:
            log_error(f'Ignoring invalid config line: {line!r}')
            return
        key, val = m.groups()
        if key == 'include':
            self.include(val, base_dir)
        elif not self.parse_conf_item(key, val, self.ans):
            log_error(f'Ignoring unknown config key: {key}')

    def include(self, val: str, base_dir: str) -> None:
        path = os.path.join(base_dir, expandvars(os.path.expanduser(val.strip())))
        key = os.path.normpath(path)
        if key in self.included:
            raise RecursiveInclude(f'The file {path} has already been included, ignoring')
        self.included.add(key)
        try:
            with open(path, encoding='utf-8', errors='replace') as f:
                self.parse(f, path)
        except OSError as e:
            log_error(f'Could not read included config file: {path} ({e.strerror}), ignoring')


def parse_config_base(
    lines: Iterable[str],
    parse_conf_item: ItemParser,
    ans: dict[str, Any],
    accumulate_bad_lines: list[BadLine] | None = None,
) -> None:
    path = getattr(lines, 'name', '')
    ConfigParser(parse_conf_item, ans, accumulate_bad_lines).parse(lines, path if isinstance(path, str) else '')


def resolve_config(system_conf: str, defconf: str, config_files_on_cmd_line: Sequence[str] = ()) -> Iterator[str]:
    if not config_files_on_cmd_line:
        yield from (system_conf, defconf)
    elif 'NONE' not in config_files_on_cmd_line:
        yield system_conf
        yield from config_files_on_cmd_line


def load_config(
    defaults: dict[str, Any],
    parse_config: Callable[[Iterable[str]], dict[str, Any]],
    merge_configs: Callable[[dict[str, Any], dict[str, Any]], dict[str, Any]],
    *paths: str,
    overrides: Iterable[str] | None = None,
) -> tuple[dict[str, Any], tuple[str, ...]]:
    ' Merge the config files that exist, in order, then the overrides, over defaults '
    ans = defaults.copy()
    found_paths = []
    for path in filter(None, paths):
        try:
            with open(path, encoding='utf-8', errors='replace') as f:
                vals = parse_config(f)
        except (FileNotFoundError, PermissionError):
            continue
        found_paths.append(path)
        ans = merge_configs(ans, vals)
    if overrides is not None:
        ans = merge_configs(ans, parse_config(overrides))
    return ans, tuple(found_paths)
