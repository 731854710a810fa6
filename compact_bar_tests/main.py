#!/usr/bin/env python
# License: GPL v3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

import os
import unittest
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from importlib.resources import files
from tempfile import TemporaryDirectory
from unittest.mock import patch

not_test_modules = frozenset({'__init__', 'main'})


def suite_module_names(package: str = __package__ or 'compact_bar_tests') -> list[str]:
    names = (os.path.splitext(p.name) for p in files(package).iterdir())
    return sorted(f'{package}.{name}' for name, ext in names if ext == '.py' and name not in not_test_modules)


def find_all_tests() -> unittest.TestSuite:
    return unittest.defaultTestLoader.loadTestsFromNames(suite_module_names())


def all_test_cases(suite: unittest.TestSuite) -> Iterator[unittest.TestCase]:
    for test in suite:
        if isinstance(test, unittest.TestSuite):
            yield from all_test_cases(test)
        else:
            yield test


def select_tests(suite: unittest.TestSuite, names: Sequence[str] = (), module: str = '') -> unittest.TestSuite:
    ' Keep only the tests with the given method names (the test_ prefix is optional) from module '
    wanted = {x if x.startswith('test_') else f'test_{x}' for x in names}
    ans = unittest.TestSuite()
    for test in all_test_cases(suite):
        if module and test.__class__.__module__.rpartition('.')[2] != module:
            continue
        if wanted and getattr(test, '_testMethodName', '') not in wanted:
            continue
        ans.addTest(test)
    return ans


@contextmanager
def private_config_dir() -> Iterator[None]:
    from compact_bar.constants import config_dir
    with TemporaryDirectory() as tdir, patch.dict(os.environ, {'COMPACT_BAR_CONFIG_DIRECTORY': tdir}):
        config_dir.clear_cached()
        try:
            yield
        finally:
            config_dir.clear_cached()


def run_tests() -> None:
    import argparse

    parser = argparse.ArgumentParser()
    parser.add_argument('name', nargs='*', default=[], help='Names of tests to run, for example: packer_balance for test_packer_balance')
    parser.add_argument('--verbosity', default=2, type=int, help='Test verbosity')
    parser.add_argument('--module', default='', help='Name of a test module to restrict to. For example: tab_line')
    args = parser.parse_args()
    tests = select_tests(find_all_tests(), args.name, args.module)
    if not tests.countTestCases():
        raise SystemExit('No tests matching {} found'.format(' '.join(args.name) or args.module))
    with private_config_dir():
        result = unittest.TextTestRunner(verbosity=args.verbosity).run(tests)
    raise SystemExit(0 if result.wasSuccessful() else 1)


def main() -> None:
    import warnings

    warnings.simplefilter('error')
    run_tests()
