# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Position-based scanning helpers for license expressions.

All helpers take an optional *end* so a nested group can be scanned in
place, without slicing the enclosing string. They never index past
*end*: a start position at or beyond it is returned unchanged (clamped
to *end*).
"""

from __future__ import annotations

from typing import Final

__all__ = [
    'WHITESPACE',
    'WHITESPACE_CHARS',
    'match_groups',
    'skip_token',
    'skip_whitespace',
]

#: Characters that separate tokens in a license expression.
WHITESPACE_CHARS: Final[str] = ' \t\r\n'
WHITESPACE: Final[frozenset[str]] = frozenset(WHITESPACE_CHARS)


def _bound(text: str, end: int | None) -> int:
    return len(text) if end is None else min(end, len(text))


def skip_whitespace(text: str, pos: int, end: int | None = None) -> int:
    """Return the index of the first non-whitespace character at or after *pos*.

    Returns *end* (default ``len(text)``) when only whitespace remains.
    """
    stop = _bound(text, end)
    while pos < stop and text[pos] in WHITESPACE:
        pos += 1
    return min(pos, stop)


def skip_token(text: str, pos: int, end: int | None = None) -> int:
    """Return the index just past the run of non-whitespace starting at *pos*.

    Returns *end* (default ``len(text)``) when the token runs to the end.
    """
    stop = _bound(text, end)
    while pos < stop and text[pos] not in WHITESPACE:
        pos += 1
    return min(pos, stop)


def match_groups(text: str, start: int = 0, end: int | None = None) -> dict[int, int]:
    """Map the position of each ``(`` in ``text[start:end]`` to its ``)``.

    One pass with a stack of open positions, so the cost is linear in
    the length however deep the nesting goes. An ``(`` that is never
    closed has no entry; a ``)`` with nothing open is ignored.

    Examples::

        >>> match_groups('((A AND B) OR C)')
        {1: 9, 0: 15}
    """
    stop = _bound(text, end)
    opens: list[int] = []
    pairs: dict[int, int] = {}
    for pos in range(start, stop):
        ch = text[pos]
        if ch == '(':
            opens.append(pos)
        elif ch == ')' and opens:
            pairs[opens.pop()] = pos
    return pairs
