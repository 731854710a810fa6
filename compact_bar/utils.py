#!/usr/bin/env python3
# vim:fileencoding=utf-8
# License: GPL v3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

import os
import re
import sys
from collections.abc import Mapping
from contextlib import suppress
from re import Match
from typing import Any

from wcwidth import wcswidth as _wcswidth
from wcwidth import wcwidth


def log_error(*a: Any, **k: str) -> None:
    with suppress(Exception):
        msg = k.get('sep', ' ').join(map(str, a)) + k.get('end', '')
        print(msg.replace('\0', ''), file=sys.stderr, flush=True)


def wcswidth(text: str) -> int:
    ' The number of terminal cells text occupies. Non-printable characters count as zero. '
    ans: int = _wcswidth(text)
    if ans < 0:
        ans = sum(max(0, wcwidth(ch)) for ch in text)
    return ans


def truncate_to_width(text: str, width: int, ellipsis: str = '…') -> str:
    '''
    Shorten text so that it fits in width cells, ending it with ellipsis
    when anything had to be removed.
    '''
    if wcswidth(text) <= width:
        return text
    limit = width - wcswidth(ellipsis)
    if limit < 0:
        return ''
    ans: list[str] = []
    used = 0
    for ch in text:
        w = max(0, wcwidth(ch))
        if used + w > limit:
            break
        ans.append(ch)
        used += w
    return ''.join(ans) + ellipsis


def sanitize_title(x: str) -> str:
    return re.sub(r'\s+', ' ', re.sub(r'[\0-\x19\x80-\x9f]', '', x))


def expandvars(val: str, env: Mapping[str, str] = {}, fallback_to_os_env: bool = True) -> str:

    def sub(m: Match[str]) -> str:
        key = m.group(1) or m.group(2)
        result = env.get(key)
        if result is None and fallback_to_os_env:
            result = os.environ.get(key)
        if result is None:
            result = m.group()
        return result

    if '$' not in val:
        return val

    return re.sub(r'\$(?:(\w+)|\{([^}]+)\})', sub, val)
