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

r"""Parser for SPDX document license expressions.

Expressions use the parenthesised set form found in SPDX documents::

    expr        = group / identifier
    group       = "(" member *(connective member) ")"
    member      = group / identifier
    connective  = WS ("AND" / "OR") WS        ; case-insensitive
    identifier  = 1*(non-whitespace)

Rules:
    - A group holds two or more members joined by one connective.
      ``(MIT AND Apache-2.0 OR ISC)`` is rejected; nest instead:
      ``((MIT AND Apache-2.0) OR ISC)``.
    - ``NONE`` and ``NOASSERTION`` are sentinels, matched
      case-sensitively.
    - An identifier never contains ``(`` or ``)``.
    - A bare identifier must be the whole expression (unless the parser
      is created with ``strict=False``, which ignores whatever follows
      the first token, as older documents sometimes require).

Groups are parsed with an explicit stack of open groups rather than by
recursion, and every "(" is matched to its ")" in one pass up front,
so nesting depth is bounded only by memory and parse time stays
linear::

    text:   ( ( A AND B ) OR C )
    stack:  [outer]  →  [outer, inner]  →  [outer]  →  []
                          inner done: LicenseSet(AND, {A, B})
                                            outer done: LicenseSet(OR, {…, C})

Parsing is all-or-nothing: the first problem raises a
:class:`~spdxkit.errors.LicenseParseError` subclass and no partial
tree is returned. Parsers hold no per-call state and can be shared
between threads.

Usage::

    from spdxkit.parser import LicenseExpressionParser
    from spdxkit.registry import LicenseRegistry

    parser = LicenseExpressionParser(LicenseRegistry.load())
    tree = parser.parse('((MIT AND Apache-2.0) OR LicenseRef-1)')
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from spdxkit._scan import (
    WHITESPACE,
    WHITESPACE_CHARS,
    match_groups,
    skip_token,
    skip_whitespace,
)
from spdxkit.classifier import classify
from spdxkit.errors import (
    DanglingConnectiveError,
    EmptyExpressionError,
    ExpectedConnectiveError,
    MissingConnectiveError,
    MixedConnectivesError,
    TrailingContentError,
    UnbalancedParensError,
    UnterminatedGroupError,
)
from spdxkit.license_tree import LicenseNode, LicenseSet, Operator
from spdxkit.logging import get_logger
from spdxkit.registry import LicenseRegistry

__all__ = [
    'LicenseExpressionParser',
    'parse_license_expression',
]

log = get_logger('spdxkit.parser')

_CONNECTIVES: Final[tuple[Operator, ...]] = (Operator.AND, Operator.OR)


@dataclass
class _OpenGroup:
    """Parse state for one group that has not seen its ``)`` yet."""

    open_pos: int
    end: int
    cursor: int
    members: list[LicenseNode] = field(default_factory=list)
    saw_and: bool = False
    saw_or: bool = False
    after_member: bool = False
    connective_pos: int = -1


class LicenseExpressionParser:
    """Parses license expression strings into license trees.

    Args:
        registry: Listed license ids used to classify identifiers.
        strict: When ``True`` (default), text after a bare top-level
            identifier raises :class:`~spdxkit.errors.TrailingContentError`.
            When ``False`` it is dropped with a warning.
    """

    def __init__(self, registry: LicenseRegistry, *, strict: bool = True) -> None:
        self._registry = registry
        self._strict = strict

    @property
    def registry(self) -> LicenseRegistry:
        """The registry used for classification."""
        return self._registry

    @property
    def strict(self) -> bool:
        """Whether trailing text after a bare identifier is an error."""
        return self._strict

    def parse(self, expression: str) -> LicenseNode:
        """Parse *expression* into a license tree.

        Raises:
            LicenseParseError: If the expression is malformed. Error
                positions index the whitespace-trimmed expression.
        """
        text = expression.strip(WHITESPACE_CHARS)
        if not text:
            raise EmptyExpressionError(text, 0, 'empty expression')
        if text[0] == '(':
            if text[-1] != ')':
                raise UnterminatedGroupError(text, len(text), 'missing closing ")"')
            return self._parse_group(text)
        return self._parse_identifier(text)

    def _parse_identifier(self, text: str) -> LicenseNode:
        end = skip_token(text, 0)
        self._check_token(text, 0, end)
        token = text[:end]
        if end < len(text):
            rest = skip_whitespace(text, end)
            if self._strict:
                raise TrailingContentError(
                    text,
                    rest,
                    f'unexpected text after license id {token!r}; wrap multiple licenses in parentheses',
                )
            log.warning(
                'license_expression_truncated',
                expression=text,
                kept=token,
                discarded=text[rest:],
            )
        return classify(token, self._registry)

    def _parse_group(self, text: str) -> LicenseSet:
        # The outer group's ")" is text[-1].
        body_start = skip_whitespace(text, 1, len(text) - 1)
        stack = [_OpenGroup(open_pos=0, end=len(text) - 1, cursor=body_start)]
        closers = match_groups(text)
        while True:
            group = stack[-1]
            pos = skip_whitespace(text, group.cursor, group.end)
            if pos >= group.end:
                node = self._close_group(text, group)
                stack.pop()
                if not stack:
                    return node
                stack[-1].members.append(node)
                continue
            if text[pos] == ')':
                raise UnbalancedParensError(text, pos, 'unexpected ")"')
            if group.after_member:
                group.cursor = self._read_connective(text, group, pos)
                group.after_member = False
                continue
            if text[pos] == '(':
                close = closers.get(pos)
                if close is None or close >= group.end:
                    raise UnbalancedParensError(text, pos, 'no matching ")" for this "("')
                group.cursor = close + 1
                group.after_member = True
                stack.append(_OpenGroup(open_pos=pos, end=close, cursor=pos + 1))
                continue
            token_end = skip_token(text, pos, group.end)
            self._check_token(text, pos, token_end)
            group.members.append(classify(text[pos:token_end], self._registry))
            group.cursor = token_end
            group.after_member = True

    @staticmethod
    def _read_connective(text: str, group: _OpenGroup, pos: int) -> int:
        """Consume ``AND``/``OR`` plus one whitespace char; return the new cursor."""
        for op in _CONNECTIVES:
            word_end = pos + len(op.value)
            if word_end > group.end or text[pos:word_end].upper() != op.value:
                continue
            if word_end == group.end:
                raise DanglingConnectiveError(text, pos, f'{op.value} must be followed by another license')
            if text[word_end] not in WHITESPACE:
                continue
            if op is Operator.AND:
                group.saw_and = True
            else:
                group.saw_or = True
            group.connective_pos = pos
            return word_end + 1
        found = text[pos : skip_token(text, pos, group.end)]
        raise ExpectedConnectiveError(text, pos, f'expected AND or OR, got {found!r}')

    @staticmethod
    def _close_group(text: str, group: _OpenGroup) -> LicenseSet:
        if group.saw_and and group.saw_or:
            raise MixedConnectivesError(
                text,
                group.open_pos,
                'AND and OR cannot be mixed in one group; add parentheses',
            )
        if group.members and not group.after_member:
            raise DanglingConnectiveError(text, group.connective_pos, 'connective must be followed by another license')
        if not (group.saw_and or group.saw_or):
            raise MissingConnectiveError(
                text,
                group.open_pos,
                'a group needs at least two licenses joined by AND or OR',
            )
        operator = Operator.AND if group.saw_and else Operator.OR
        return LicenseSet(operator, frozenset(group.members))

    @staticmethod
    def _check_token(text: str, start: int, end: int) -> None:
        for pos in range(start, end):
            if text[pos] in '()':
                raise UnbalancedParensError(text, pos, f'unexpected {text[pos]!r} in license id')


def parse_license_expression(
    expression: str,
    registry: LicenseRegistry,
    *,
    strict: bool = True,
) -> LicenseNode:
    """Parse *expression* with a one-off :class:`LicenseExpressionParser`.

    Examples::

        >>> registry = LicenseRegistry.from_ids(['MIT', 'Apache-2.0'])
        >>> parse_license_expression('(MIT OR Apache-2.0)', registry)
        LicenseSet(Operator.OR, '(MIT OR Apache-2.0)')
        >>> parse_license_expression('NOASSERTION', registry)
        NoAssertionLicense()
    """
    return LicenseExpressionParser(registry, strict=strict).parse(expression)
