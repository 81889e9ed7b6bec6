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

r"""License tree node types.

A parsed license expression is a tree built from a closed set of node
types::

    ┌──────────────────────┬───────────────────────────────────────────────┐
    │ Node                 │ Meaning                                       │
    ├──────────────────────┼───────────────────────────────────────────────┤
    │ StandardLicenseRef   │ A license on the SPDX license list (MIT, ...) │
    ├──────────────────────┼───────────────────────────────────────────────┤
    │ ProjectLicenseRef    │ A license local to one document, usually      │
    │                      │ ``LicenseRef-<n>`` (an "extracted" license).  │
    ├──────────────────────┼───────────────────────────────────────────────┤
    │ LicenseSet           │ Two or more members joined by one connective: │
    │                      │ AND (all apply) or OR (any one applies).      │
    ├──────────────────────┼───────────────────────────────────────────────┤
    │ NoneLicense          │ ``NONE``: explicitly no license.              │
    ├──────────────────────┼───────────────────────────────────────────────┤
    │ NoAssertionLicense   │ ``NOASSERTION``: no claim made.               │
    └──────────────────────┴───────────────────────────────────────────────┘

Equality is structural. License leaves compare by node type and ``id``
only, so descriptive metadata (name, text, URLs) can be filled in later
without changing identity. Set members live in a :class:`frozenset`, so
duplicates collapse and member order never matters for equality. The
rendered form of a set therefore has no fixed member order; re-parsing
any rendering yields an equal tree.

Usage::

    from spdxkit.license_tree import LicenseSet, Operator, StandardLicenseRef

    tree = LicenseSet.of(Operator.OR, StandardLicenseRef('MIT'), StandardLicenseRef('Apache-2.0'))
    str(tree)  # '(MIT OR Apache-2.0)' or '(Apache-2.0 OR MIT)'
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Final

__all__ = [
    'NOASSERTION_LICENSE_NAME',
    'NONE_LICENSE_NAME',
    'ConjunctiveLicenseSet',
    'DisjunctiveLicenseSet',
    'LicenseNode',
    'LicenseSet',
    'NoAssertionLicense',
    'NoneLicense',
    'Operator',
    'ProjectLicenseRef',
    'StandardLicenseRef',
    'license_ids',
    'render',
    'walk',
]

NONE_LICENSE_NAME: Final[str] = 'NONE'
NOASSERTION_LICENSE_NAME: Final[str] = 'NOASSERTION'


class Operator(enum.Enum):
    """Connective joining the members of a :class:`LicenseSet`."""

    AND = 'AND'
    OR = 'OR'


# Leaves hash and compare on ``id`` only. Reassigning ``id`` on a leaf
# that already sits inside a LicenseSet corrupts that set.


@dataclass(unsafe_hash=True)
class StandardLicenseRef:
    """A license from the SPDX license list.

    Attributes:
        id: The SPDX short identifier (e.g. ``"Apache-2.0"``).
        name: Full license name.
        text: Full license text.
        source_urls: Reference URLs for the license.
        notes: Free-form notes.
        standard_header: Standard license header text.
        template: License template text.
        osi_approved: Whether OSI has approved the license.
    """

    id: str
    name: str = field(default='', compare=False)
    text: str = field(default='', compare=False)
    source_urls: tuple[str, ...] = field(default=(), compare=False)
    notes: str = field(default='', compare=False)
    standard_header: str = field(default='', compare=False)
    template: str = field(default='', compare=False)
    osi_approved: bool = field(default=False, compare=False)

    def __str__(self) -> str:
        """Return the license id."""
        return self.id


@dataclass(unsafe_hash=True)
class ProjectLicenseRef:
    """A license local to one document.

    Ids handed out by :class:`~spdxkit.allocator.LicenseRefAllocator` look
    like ``LicenseRef-7``; ids from other sources can be any token.

    Attributes:
        id: The document-local identifier.
        text: The extracted license text, if known.
    """

    id: str
    text: str = field(default='', compare=False)

    def __str__(self) -> str:
        """Return the license id."""
        return self.id


@dataclass(frozen=True)
class NoneLicense:
    """``NONE``: the item explicitly carries no license."""

    def __str__(self) -> str:
        """Return ``NONE``."""
        return NONE_LICENSE_NAME


@dataclass(frozen=True)
class NoAssertionLicense:
    """``NOASSERTION``: no claim about the license is made."""

    def __str__(self) -> str:
        """Return ``NOASSERTION``."""
        return NOASSERTION_LICENSE_NAME


@dataclass(frozen=True, repr=False)
class LicenseSet:
    """Members joined by a single connective.

    Equality, ``str`` and ``repr`` walk the tree with explicit stacks,
    so very deep trees compare and render without hitting the
    recursion limit.

    Attributes:
        operator: :attr:`Operator.AND` (conjunctive) or
            :attr:`Operator.OR` (disjunctive).
        members: The distinct member nodes. Any iterable passed in is
            converted to a :class:`frozenset`.
    """

    operator: Operator
    members: frozenset[LicenseNode]

    def __post_init__(self) -> None:
        """Normalize *members* to a frozenset and check node types."""
        if not isinstance(self.operator, Operator):
            raise TypeError(f'operator must be an Operator, got {type(self.operator).__name__}')
        members = frozenset(self.members)
        for member in members:
            if not isinstance(member, _NODE_TYPES):
                raise TypeError(f'not a license node: {member!r}')
        object.__setattr__(self, 'members', members)

    @classmethod
    def of(cls, operator: Operator, *members: LicenseNode) -> LicenseSet:
        """Build a set from positional members."""
        return cls(operator, frozenset(members))

    @property
    def conjunctive(self) -> bool:
        """``True`` for an AND set."""
        return self.operator is Operator.AND

    @property
    def disjunctive(self) -> bool:
        """``True`` for an OR set."""
        return self.operator is Operator.OR

    def __len__(self) -> int:
        """Return the number of distinct members."""
        return len(self.members)

    def __iter__(self) -> Iterator[LicenseNode]:
        """Iterate over members in unspecified order."""
        return iter(self.members)

    def __str__(self) -> str:
        """Return ``(a AND b ...)`` or ``(a OR b ...)``."""
        return render(self)

    def __repr__(self) -> str:
        return f'LicenseSet(Operator.{self.operator.name}, {render(self)!r})'

    def __hash__(self) -> int:
        # Member frozensets cache their hashes, so this stays shallow for
        # trees built bottom-up.
        return hash((self.operator, self.members))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LicenseSet):
            return NotImplemented
        if self is other:
            return True
        if self.operator is not other.operator or len(self.members) != len(other.members):
            return False
        if hash(self) != hash(other):
            return False
        table: dict[tuple, int] = {}
        return _intern(self, table) == _intern(other, table)


def ConjunctiveLicenseSet(*members: LicenseNode) -> LicenseSet:  # noqa: N802
    """Return an AND set of *members*."""
    return LicenseSet(Operator.AND, frozenset(members))


def DisjunctiveLicenseSet(*members: LicenseNode) -> LicenseSet:  # noqa: N802
    """Return an OR set of *members*."""
    return LicenseSet(Operator.OR, frozenset(members))


# Union of all tree node types.
LicenseNode = StandardLicenseRef | ProjectLicenseRef | LicenseSet | NoneLicense | NoAssertionLicense

_NODE_TYPES = (StandardLicenseRef, ProjectLicenseRef, LicenseSet, NoneLicense, NoAssertionLicense)


def _leaf_text(node: LicenseNode) -> str:
    if isinstance(node, (StandardLicenseRef, ProjectLicenseRef)):
        return node.id
    if isinstance(node, NoneLicense):
        return NONE_LICENSE_NAME
    if isinstance(node, NoAssertionLicense):
        return NOASSERTION_LICENSE_NAME
    raise TypeError(f'not a license node: {node!r}')


def render(node: LicenseNode) -> str:
    """Render *node* in license expression syntax.

    Raises:
        TypeError: If *node* is not a license tree node.
    """
    if not isinstance(node, _NODE_TYPES):
        raise TypeError(f'not a license node: {node!r}')
    parts: list[str] = []
    # Plain strings on the stack are literal output: separators and ")".
    stack: list[LicenseNode | str] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, str):
            parts.append(current)
        elif isinstance(current, LicenseSet):
            parts.append('(')
            sep = f' {current.operator.value} '
            members = list(current.members)
            stack.append(')')
            for i in range(len(members) - 1, -1, -1):
                stack.append(members[i])
                if i:
                    stack.append(sep)
        else:
            parts.append(_leaf_text(current))
    return ''.join(parts)


def _intern(root: LicenseSet, table: dict[tuple, int]) -> int:
    """Number *root* so that structurally equal trees get the same number.

    Numbers come from *table*, which must be shared between the trees
    being compared. Children are numbered before their parent.
    """
    done: dict[int, int] = {}
    stack: list[tuple[LicenseNode, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if id(node) in done:
            continue
        if isinstance(node, LicenseSet):
            if not expanded:
                stack.append((node, True))
                stack.extend((m, False) for m in node.members if id(m) not in done)
                continue
            key: tuple = (LicenseSet, node.operator, frozenset(done[id(m)] for m in node.members))
        elif isinstance(node, (StandardLicenseRef, ProjectLicenseRef)):
            key = (type(node), node.id)
        else:
            key = (type(node),)
        done[id(node)] = table.setdefault(key, len(table))
    return done[id(root)]


def walk(node: LicenseNode) -> Iterator[LicenseNode]:
    """Yield *node* and every node below it, depth-first.

    Uses an explicit stack, so arbitrarily deep trees are safe.
    """
    stack: list[LicenseNode] = [node]
    while stack:
        current = stack.pop()
        if not isinstance(current, _NODE_TYPES):
            raise TypeError(f'not a license node: {current!r}')
        yield current
        if isinstance(current, LicenseSet):
            stack.extend(current.members)


def license_ids(nodes: LicenseNode | Iterable[LicenseNode]) -> set[str]:
    """Collect the ids of all standard and project-local leaves.

    Sentinels (``NONE``, ``NOASSERTION``) are not licenses and are skipped.

    Examples::

        >>> license_ids(DisjunctiveLicenseSet(StandardLicenseRef('MIT'), NoneLicense()))
        {'MIT'}
    """
    roots = [nodes] if isinstance(nodes, _NODE_TYPES) else list(nodes)
    ids: set[str] = set()
    for root in roots:
        for node in walk(root):
            if isinstance(node, (StandardLicenseRef, ProjectLicenseRef)):
                ids.add(node.id)
    return ids
