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

"""Document-scoped allocation of ``LicenseRef-<n>`` identifiers.

Every SPDX document numbers its extracted (project-local) licenses
``LicenseRef-1``, ``LicenseRef-2``, ... Each in-memory document owns one
:class:`LicenseRefAllocator`. Before issuing anything, the allocator is
seeded with the ids already present in the document, so the next id is
one past the highest existing number::

    allocator = LicenseRefAllocator()
    allocator.seed(['LicenseRef-1', 'LicenseRef-5', 'LicenseRef-custom'])
    allocator.allocate_id()  # 'LicenseRef-6'
    allocator.allocate_id()  # 'LicenseRef-7'

Ids that do not match that form (``LicenseRef-custom``) are ignored while
seeding. Reseed whenever the document's extracted licenses are replaced
wholesale, otherwise a new id can collide with one that was just added.

:meth:`LicenseRefAllocator.allocate` holds a lock, so threads sharing
one allocator always receive distinct numbers.
"""

from __future__ import annotations

import re
import threading
from collections.abc import Iterable
from typing import Final

from spdxkit.logging import get_logger

__all__ = [
    'LICENSE_REF_PATTERN',
    'LICENSE_REF_PREFIX',
    'LicenseRefAllocator',
    'format_license_ref',
    'license_ref_number',
]

log = get_logger('spdxkit.allocator')

LICENSE_REF_PREFIX: Final[str] = 'LicenseRef-'

#: Matches allocator-style ids; group 1 is the number.
LICENSE_REF_PATTERN: Final[re.Pattern[str]] = re.compile(r'LicenseRef-(\d+)')


def format_license_ref(number: int) -> str:
    """Return ``LicenseRef-<number>``."""
    return f'{LICENSE_REF_PREFIX}{number}'


def license_ref_number(license_id: str) -> int | None:
    """Return N for an id of the form ``LicenseRef-N``, else ``None``."""
    m = LICENSE_REF_PATTERN.fullmatch(license_id)
    if m is None:
        return None
    return int(m.group(1))


class LicenseRefAllocator:
    """Issues unique ``LicenseRef-<n>`` numbers for one document.

    Args:
        start: The first number to hand out before any seeding.
    """

    def __init__(self, start: int = 1) -> None:
        if start < 1:
            raise ValueError(f'start must be >= 1, got {start}')
        self._next = start
        self._lock = threading.Lock()

    def seed(self, existing_ids: Iterable[str]) -> int:
        """Reset the counter to one past the highest numbered id.

        Ids that are not of the ``LicenseRef-<digits>`` form are skipped.
        With no numbered ids the counter restarts at 1.

        Returns:
            The number the next :meth:`allocate` call will return.
        """
        highest = 0
        skipped = 0
        for license_id in existing_ids:
            number = license_ref_number(license_id)
            if number is None:
                skipped += 1
                continue
            highest = max(highest, number)
        with self._lock:
            self._next = highest + 1
            next_number = self._next
        log.debug('license_ref_allocator_seeded', next=next_number, skipped=skipped)
        return next_number

    def allocate(self) -> int:
        """Return the current counter value and advance it."""
        with self._lock:
            number = self._next
            self._next += 1
        return number

    def allocate_id(self) -> str:
        """Allocate a number and return it as ``LicenseRef-<n>``."""
        return format_license_ref(self.allocate())

    def peek(self) -> int:
        """Return the number the next :meth:`allocate` call would return."""
        with self._lock:
            return self._next
