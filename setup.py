#!/usr/bin/env python
# License: GPL v3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

import os
import re

from setuptools import find_packages, setup

src_base = os.path.dirname(os.path.abspath(__file__))
with open(os.path.join(src_base, 'compact_bar', 'constants.py'), 'rb') as f:
    constants = f.read().decode('utf-8')
appname = re.search(r"^appname: str = '([^']+)'", constants, re.MULTILINE).group(1)  # type: ignore
version = tuple(
    map(
        int,
        re.search(  # type: ignore
            r"^version: Version = Version\((\d+), (\d+), (\d+)\)", constants, re.MULTILINE
        ).group(1, 2, 3)
    )
)


setup(
    name=appname,
    version='.'.join(map(str, version)),
    description='Adaptive tab line layout for terminal multiplexer status bars',
    license='GPL-3.0-only',
    packages=find_packages(include=['compact_bar', 'compact_bar.*']),
    python_requires='>=3.10',
    install_requires=['wcwidth'],
    entry_points={
        'console_scripts': ['compact-bar = compact_bar.main:main'],
    },
)
