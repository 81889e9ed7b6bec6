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

"""Non-fatal validation of license trees.

Parsing is deliberately lenient about identifiers: any token that is not
a sentinel or a listed id becomes a project-local license. This module
is the strict half. It walks a tree and returns human-readable warning
strings; it never raises for a bad tree, so callers can fold the
results into a document-wide validation report.
"""

from __future__ import annotations

import re
from typing import Final

from spdxkit.license_tree import (
    LicenseNode,
    LicenseSet,
    ProjectLicenseRef,
    StandardLicenseRef,
    walk,
)
from spdxkit.registry import LicenseRegistry

__all__ = [
    'PROJECT_LICENSE_ID_PATTERN',
    'verify_license',
]

#: Well-formed project-local license ids.
PROJECT_LICENSE_ID_PATTERN: Final[re.Pattern[str]] = re.compile(r'[-+_.A-Za-z0-9]{3,}')


def verify_license(
    node: LicenseNode,
    *,
    registry: LicenseRegistry | None = None,
    require_text: bool = False,
) -> list[str]:
    """Return warnings for every problem found in *node* and below.

    Args:
        node: Root of the tree to check.
        registry: When given, standard leaves whose id is not listed are
            reported.
        require_text: Also report leaves without license text (and
            standard leaves without a name), as required for licenses
            declared in a document's extracted-license section.

    Returns:
        Warning strings, empty if the tree is clean. Warnings for set
        members come in no particular order.
    """
    warnings: list[str] = []
    for current in walk(node):
        if isinstance(current, ProjectLicenseRef):
            warnings.extend(_verify_project(current, require_text=require_text))
        elif isinstance(current, StandardLicenseRef):
            warnings.extend(_verify_standard(current, registry=registry, require_text=require_text))
        elif isinstance(current, LicenseSet):
            if len(current) < 2:
                warnings.append(f'License set {current} has fewer than two distinct members')
    return warnings


def _verify_project(lic: ProjectLicenseRef, *, require_text: bool) -> list[str]:
    warnings: list[str] = []
    if not lic.id:
        warnings.append('Missing required license ID')
    elif not PROJECT_LICENSE_ID_PATTERN.fullmatch(lic.id):
        warnings.append(
            f"Invalid license id '{lic.id}'. Must be at least 3 characters long and made up of "
            "the characters 'a'-'z', 'A'-'Z', '0'-'9', '+', '_', '.', and '-'."
        )
    if require_text and not lic.text:
        warnings.append(f'Missing required license text for {lic.id or "<no id>"}')
    return warnings


def _verify_standard(
    lic: StandardLicenseRef,
    *,
    registry: LicenseRegistry | None,
    require_text: bool,
) -> list[str]:
    warnings: list[str] = []
    if not lic.id:
        warnings.append('Missing required license ID')
    elif registry is not None and not registry.is_listed(lic.id):
        warnings.append(f"License id '{lic.id}' is not on the SPDX license list")
    if require_text:
        if not lic.name:
            warnings.append(f'Missing required license name for {lic.id or "<no id>"}')
        if not lic.text:
            warnings.append(f'Missing required license text for {lic.id or "<no id>"}')
    return warnings
