#!/usr/bin/env python
# License: GPL v3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

import os
from typing import NamedTuple

from .types import run_once


class Version(NamedTuple):
    major: int
    minor: int
    patch: int


appname: str = 'compact_bar'
version: Version = Version(0, 1, 0)
str_version: str = '.'.join(map(str, version))
# Powerline arrow, drawn on both sides of ribbons and collapse indicators
ARROW_SEPARATOR = '\ue0b0'
# Draws the outer edges of the group control ribbons, one column each
RIBBON_EDGE = '\ue0b0'
default_brand_label = ' Zellij '
unbound_key_label = 'UNBOUND'
multiple_select_plugin = 'zellij:multiple-select'
# Beyond this many hidden tabs the collapse indicators stop growing
max_hidden_tab_count = 10000
# 3 ribbons of one edge and one space on either side of their text
ribbon_paddings_len = 12


@run_once
def config_dir() -> str:
    if 'COMPACT_BAR_CONFIG_DIRECTORY' in os.environ:
        return os.path.abspath(os.path.expanduser(os.environ['COMPACT_BAR_CONFIG_DIRECTORY']))
    candidate = os.environ.get('XDG_CONFIG_HOME', '~/.config')
    return os.path.join(os.path.abspath(os.path.expanduser(candidate)), appname)


def defconf() -> str:
    return os.path.join(config_dir(), f'{appname}.conf')
