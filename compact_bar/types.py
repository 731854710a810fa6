#!/usr/bin/env python
# License: GPLv3 Copyright: 2026, Kovid Goyal <kovid at kovidgoyal.net>

from collections.abc import Callable
from enum import Enum
from functools import update_wrapper
from typing import Any, Generic, NamedTuple, TypeVar

_T = TypeVar('_T')


class InputMode(Enum):
    normal = 'Normal'
    locked = 'Locked'
    resize = 'Resize'
    pane = 'Pane'
    tab = 'Tab'
    scroll = 'Scroll'
    enter_search = 'EnterSearch'
    search = 'Search'
    rename_tab = 'RenameTab'
    rename_pane = 'RenamePane'
    session = 'Session'
    move = 'Move'
    prompt = 'Prompt'
    tmux = 'Tmux'

    @classmethod
    def from_name(cls, name: str) -> 'InputMode':
        q = name.replace('-', '_').lower()
        for m in cls:
            if q in (m.name, m.value.lower()):
                return m
        raise ValueError(f'Unknown input mode: {name}')


class Highlight(NamedTuple):
    start: int
    stop: int
    role: str


class Span(NamedTuple):
    text: str = ''
    width: int = 0
    tab_index: int | None = None
    style: str = ''
    highlights: tuple[Highlight, ...] = ()


class Tab(NamedTuple):
    title: str
    width: int
    index: int


_unset: Any = object()


class RunOnce(Generic[_T]):
    ' Call a function of no arguments the first time it is needed and remember the result '

    def __init__(self, func: Callable[[], _T]) -> None:
        update_wrapper(self, func)
        self.func = func
        self.result: Any = _unset

    def __call__(self) -> _T:
        if self.result is _unset:
            self.result = self.func()
        ans: _T = self.result
        return ans

    def clear_cached(self) -> None:
        self.result = _unset


def run_once(f: Callable[[], _T]) -> RunOnce[_T]:
    return RunOnce(f)
