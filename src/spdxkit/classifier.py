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

"""Resolve a single license token to a tree leaf.

Checks run in this order:

1. ``NONE`` / ``NOASSERTION`` (exact, case-sensitive) become sentinels.
2. Ids on the SPDX license list become :class:`StandardLicenseRef`.
3. Anything else becomes a :class:`ProjectLicenseRef`.

Classification never fails. Whether a project-local id is well formed
is checked later by :func:`spdxkit.verify.verify_license`, which only
reports warnings, so placeholder ids still parse.
"""

from __future__ import annotations

from spdxkit.license_tree import (
    NOASSERTION_LICENSE_NAME,
    NONE_LICENSE_NAME,
    NoAssertionLicense,
    NoneLicense,
    ProjectLicenseRef,
    StandardLicenseRef,
)
from spdxkit.registry import LicenseRegistry

__all__ = [
    'LicenseLeaf',
    'classify',
]

LicenseLeaf = NoneLicense | NoAssertionLicense | StandardLicenseRef | ProjectLicenseRef


def classify(token: str, registry: LicenseRegistry) -> LicenseLeaf:
    """Return the leaf node for *token*.

    Examples::

        >>> registry = LicenseRegistry.from_ids(['MIT'])
        >>> classify('MIT', registry)
        StandardLicenseRef(id='MIT', ...)
        >>> classify('LicenseRef-3', registry)
        ProjectLicenseRef(id='LicenseRef-3', text='')
        >>> classify('NONE', registry)
        NoneLicense()
    """
    if token == NONE_LICENSE_NAME:
        return NoneLicense()
    if token == NOASSERTION_LICENSE_NAME:
        return NoAssertionLicense()
    if registry.is_listed(token):
        return registry.standard_license(token)
    return ProjectLicenseRef(token)
