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

"""License state owned by one in-memory SPDX document.

:class:`DocumentLicenses` ties together the pieces a document model
needs: the shared registry, a parser, the document's extracted
(project-local) licenses, and the :class:`LicenseRefAllocator` that
numbers new ones. It keeps the allocator consistent with the extracted
licenses: construction and every bulk replacement reseed it.

Usage::

    doc = DocumentLicenses(registry, [ProjectLicenseRef('LicenseRef-4', text='...')])
    new = doc.add_extracted_license('Permission is granted ...')
    new.id  # 'LicenseRef-5'

    tree = doc.parse('(MIT AND LicenseRef-5)')
    doc.verify_expression(tree)  # []
"""

from __future__ import annotations

import threading
from collections import Counter
from collections.abc import Iterable

from spdxkit.allocator import LicenseRefAllocator
from spdxkit.errors import DuplicateLicenseIdError
from spdxkit.license_tree import LicenseNode, ProjectLicenseRef, walk
from spdxkit.logging import get_logger
from spdxkit.parser import LicenseExpressionParser
from spdxkit.registry import LicenseRegistry
from spdxkit.verify import verify_license

__all__ = [
    'DocumentLicenses',
]

log = get_logger('spdxkit.document')


class DocumentLicenses:
    """Extracted licenses and LicenseRef numbering for one document.

    Args:
        registry: Listed license ids, shared across documents.
        extracted: The document's existing extracted licenses.
        strict: Passed to the document's :class:`LicenseExpressionParser`.

    Raises:
        DuplicateLicenseIdError: If *extracted* repeats an id.
    """

    def __init__(
        self,
        registry: LicenseRegistry,
        extracted: Iterable[ProjectLicenseRef] = (),
        *,
        strict: bool = True,
    ) -> None:
        self._registry = registry
        self._parser = LicenseExpressionParser(registry, strict=strict)
        self._allocator = LicenseRefAllocator()
        self._lock = threading.Lock()
        self._extracted: dict[str, ProjectLicenseRef] = {}
        self.set_extracted_licenses(extracted)

    @property
    def registry(self) -> LicenseRegistry:
        """The registry used to classify identifiers."""
        return self._registry

    @property
    def parser(self) -> LicenseExpressionParser:
        """The parser used by :meth:`parse`."""
        return self._parser

    @property
    def allocator(self) -> LicenseRefAllocator:
        """The allocator numbering this document's extracted licenses."""
        return self._allocator

    def extracted_licenses(self) -> list[ProjectLicenseRef]:
        """Return the extracted licenses in insertion order."""
        with self._lock:
            return list(self._extracted.values())

    def get_extracted_license(self, license_id: str) -> ProjectLicenseRef | None:
        """Return the extracted license with *license_id*, if declared."""
        with self._lock:
            return self._extracted.get(license_id)

    def add_extracted_license(self, text: str) -> ProjectLicenseRef:
        """Declare a new extracted license under a freshly allocated id."""
        with self._lock:
            lic = ProjectLicenseRef(self._allocator.allocate_id(), text=text)
            self._extracted[lic.id] = lic
        log.debug('extracted_license_added', license_id=lic.id)
        return lic

    def set_extracted_licenses(self, licenses: Iterable[ProjectLicenseRef]) -> None:
        """Replace all extracted licenses and reseed the allocator.

        Raises:
            DuplicateLicenseIdError: If *licenses* repeats an id. The
                existing licenses are left untouched.
        """
        new = list(licenses)
        counts = Counter(lic.id for lic in new)
        duplicates = sorted(i for i, n in counts.items() if n > 1)
        if duplicates:
            raise DuplicateLicenseIdError(duplicates)
        with self._lock:
            self._extracted = {lic.id: lic for lic in new}
            self._allocator.seed(self._extracted)
        log.debug('extracted_licenses_replaced', count=len(new))

    def parse(self, expression: str) -> LicenseNode:
        """Parse *expression* and fill in text for declared extracted licenses.

        Raises:
            LicenseParseError: If the expression is malformed.
        """
        tree = self._parser.parse(expression)
        with self._lock:
            for node in walk(tree):
                if isinstance(node, ProjectLicenseRef) and not node.text:
                    declared = self._extracted.get(node.id)
                    if declared is not None:
                        node.text = declared.text
        return tree

    def verify(self) -> list[str]:
        """Return warnings for the declared extracted licenses."""
        warnings: list[str] = []
        for lic in self.extracted_licenses():
            warnings.extend(verify_license(lic, require_text=True))
        return warnings

    def verify_expression(self, tree: LicenseNode) -> list[str]:
        """Return warnings for a license tree used in this document.

        Besides :func:`~spdxkit.verify.verify_license` checks against the
        registry, project-local ids that the document never declared are
        reported.
        """
        warnings = verify_license(tree, registry=self._registry)
        with self._lock:
            declared = set(self._extracted)
        for node in walk(tree):
            if isinstance(node, ProjectLicenseRef) and node.id not in declared:
                warnings.append(f"License '{node.id}' is not declared in the document's extracted licenses")
        return warnings
