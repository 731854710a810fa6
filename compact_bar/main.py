#!/usr/bin/env python
# License: GPL v3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

import argparse
import json
import shutil
import sys
from collections.abc import Sequence

from .config import Options, init_config
from .constants import appname, str_version
from .status import GroupControlsInfo
from .tab_line import as_text, render_tab, tab_line
from .types import InputMode, Span


def option_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=appname.replace('_', '-'),
        description='Render a compact tab line for a terminal multiplexer status bar in a fixed number of columns',
    )
    parser.add_argument('titles', nargs='*', metavar='TITLE', help='The titles of the tabs, in order')
    parser.add_argument('--cols', type=int, default=None, help='Number of columns available. Defaults to the width of the terminal')
    parser.add_argument('--active', type=int, default=0, help='Index of the active tab')
    parser.add_argument('--session', default=None, help='The session name')
    parser.add_argument('--mode', default='normal', type=InputMode.from_name, help='The current input mode, for example: normal or locked')
    parser.add_argument('--swap-layout', default=None, help='Name of the active swap layout')
    parser.add_argument('--dirty', action='store_true', help='The swap layout has been modified')
    parser.add_argument('--grouped-panes', type=int, default=None, help='Number of panes in the current group, shows the group controls')
    parser.add_argument('--marking', action='store_true', help='Panes are currently being marked for the group')
    parser.add_argument(
        '--config', '-c', action='append', default=[],
        help='Path to the config file to use, can be specified multiple times. Use NONE to not load any config file')
    parser.add_argument(
        '--override', '-o', action='append', default=[],
        help='Override individual configuration options, for example: -o simplified_ui=yes')
    parser.add_argument('--spans', action='store_true', help='Print each span as a JSON object instead of the line')
    parser.add_argument('--version', action='version', version=f'%(prog)s {str_version}')
    return parser


def build_line(args: argparse.Namespace, opts: Options, cols: int) -> list[Span]:
    tabs = [
        render_tab(title, i, i == args.active, opts.separator, opts.tab_title_max_length)
        for i, title in enumerate(args.titles)
    ]
    group_controls = None
    if args.grouped_panes is not None:
        group_controls = GroupControlsInfo(args.grouped_panes, opts.map, args.marking)
    return tab_line(
        args.session, tabs, args.active, cols, opts.separator,
        hide_session_name=opts.hide_session_name, mode=args.mode,
        active_swap_layout_name=args.swap_layout, is_swap_layout_dirty=args.dirty,
        group_controls=group_controls, brand=opts.brand_label,
    )


def main(argv: Sequence[str] | None = None) -> None:
    parser = option_parser()
    args = parser.parse_args(argv)
    if args.titles and not 0 <= args.active < len(args.titles):
        parser.error(f'The active tab index must be between 0 and {len(args.titles) - 1}')
    cols = shutil.get_terminal_size().columns if args.cols is None else max(0, args.cols)
    opts = init_config(args.config, args.override)
    spans = build_line(args, opts, cols)
    if args.spans:
        for s in spans:
            print(json.dumps({'text': s.text, 'width': s.width, 'tab_index': s.tab_index, 'style': s.style}, ensure_ascii=False))
    else:
        print(as_text(spans))
    sys.stdout.flush()


if __name__ == '__main__':
    main()
