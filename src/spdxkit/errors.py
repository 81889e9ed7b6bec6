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

"""Error types raised by spdxkit.

Parse failures all derive from :class:`LicenseParseError`, which is also
a :class:`ValueError` so callers that only care about "bad input" can
catch the builtin. Each failure mode has its own subclass and a matching
:class:`ParseErrorKind` member, so converters can branch on either::

    try:
        tree = parser.parse(text)
    except MixedConnectivesError:
        ...
    except LicenseParseError as exc:
        if exc.kind is ParseErrorKind.UNBALANCED_PARENS:
            ...
"""

from __future__ import annotations

import enum
from typing import ClassVar

__all__ = [
    'ConfigError',
    'DanglingConnectiveError',
    'DuplicateLicenseIdError',
    'EmptyExpressionError',
    'ExpectedConnectiveError',
    'LicenseDataError',
    'LicenseParseError',
    'MissingConnectiveError',
    'MixedConnectivesError',
    'ParseErrorKind',
    'RegistryFetchError',
    'SpdxKitError',
    'TrailingContentError',
    'UnbalancedParensError',
    'UnterminatedGroupError',
]


class SpdxKitError(Exception):
    """Base class for every error raised by spdxkit."""


class ParseErrorKind(enum.Enum):
    """Failure modes of the license expression parser."""

    EMPTY_EXPRESSION = 'empty-expression'
    UNTERMINATED_GROUP = 'unterminated-group'
    UNBALANCED_PARENS = 'unbalanced-parens'
    MISSING_CONNECTIVE = 'missing-connective'
    MIXED_CONNECTIVES = 'mixed-connectives'
    EXPECTED_CONNECTIVE = 'expected-connective'
    DANGLING_CONNECTIVE = 'dangling-connective'
    TRAILING_CONTENT = 'trailing-content'


class LicenseParseError(SpdxKitError, ValueError):
    """Raised when a license expression cannot be parsed.

    Attributes:
        expression: The (whitespace-trimmed) expression being parsed.
        position: Character offset into *expression* where the problem
            was detected.
        detail: Human-readable description of the problem.
        kind: The :class:`ParseErrorKind` of this error.
    """

    kind: ClassVar[ParseErrorKind]

    def __init__(self, expression: str, position: int, detail: str) -> None:
        """Initialize with expression text, error position, and detail message."""
        self.expression = expression
        self.position = position
        self.detail = detail
        marker = ' ' * position + '^'
        super().__init__(f'license expression error at position {position}: {detail}\n  {expression}\n  {marker}')


class EmptyExpressionError(LicenseParseError):
    """The expression is empty or only whitespace."""

    kind = ParseErrorKind.EMPTY_EXPRESSION


class UnterminatedGroupError(LicenseParseError):
    """An expression starting with ``(`` does not end with ``)``."""

    kind = ParseErrorKind.UNTERMINATED_GROUP


class UnbalancedParensError(LicenseParseError):
    """A nested group has no matching ``)`` or a stray parenthesis appears."""

    kind = ParseErrorKind.UNBALANCED_PARENS


class MissingConnectiveError(LicenseParseError):
    """A group holds a single member and no ``AND``/``OR``."""

    kind = ParseErrorKind.MISSING_CONNECTIVE


class MixedConnectivesError(LicenseParseError):
    """Both ``AND`` and ``OR`` appear at the same nesting level."""

    kind = ParseErrorKind.MIXED_CONNECTIVES


class ExpectedConnectiveError(LicenseParseError):
    """Something other than ``AND``/``OR`` separates two members."""

    kind = ParseErrorKind.EXPECTED_CONNECTIVE


class DanglingConnectiveError(LicenseParseError):
    """A connective is not followed by another member."""

    kind = ParseErrorKind.DANGLING_CONNECTIVE


class TrailingContentError(LicenseParseError):
    """Text follows a complete single-identifier expression."""

    kind = ParseErrorKind.TRAILING_CONTENT


class LicenseDataError(SpdxKitError):
    """Raised when license registry data fails validation.

    Attributes:
        errors: List of human-readable error strings.
    """

    def __init__(self, errors: list[str]) -> None:
        """Initialize with the accumulated validation errors."""
        self.errors = errors
        bullet_list = '\n'.join(f'  - {e}' for e in errors)
        super().__init__(f'License data has {len(errors)} validation error(s):\n{bullet_list}')


class RegistryFetchError(SpdxKitError):
    """Raised when the remote SPDX license list cannot be retrieved."""


class DuplicateLicenseIdError(SpdxKitError):
    """Raised when extracted licenses in one document share an id.

    Attributes:
        license_ids: The ids that occur more than once, sorted.
    """

    def __init__(self, license_ids: list[str]) -> None:
        """Initialize with the duplicated ids."""
        self.license_ids = license_ids
        super().__init__(f'Duplicate extracted license id(s): {", ".join(license_ids)}')


class ConfigError(SpdxKitError):
    """Raised when a configuration file is unreadable or invalid."""
