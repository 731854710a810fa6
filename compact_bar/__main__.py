#!/usr/bin/env python3
# License: GPL v3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

from compact_bar.main import main

if __name__ == '__main__':
    main()
