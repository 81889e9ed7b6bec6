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

"""SPDX license expression parsing and LicenseRef allocation.

spdxkit turns license strings from SPDX documents into immutable
license trees, tells SPDX-listed licenses apart from project-local
ones, and numbers a document's extracted licenses
``LicenseRef-1``, ``LicenseRef-2``, ...

Usage::

    from spdxkit import LicenseRegistry, parse_license_expression

    registry = LicenseRegistry.load()
    tree = parse_license_expression('((MIT AND Apache-2.0) OR LicenseRef-1)', registry)
    str(tree)  # e.g. '((MIT AND Apache-2.0) OR LicenseRef-1)'

    # Members are sets, so order and duplicates do not matter:
    assert tree == parse_license_expression('(LicenseRef-1 OR (Apache-2.0 AND MIT))', registry)
"""

from spdxkit.allocator import LicenseRefAllocator, format_license_ref, license_ref_number
from spdxkit.classifier import classify
from spdxkit.document import DocumentLicenses
from spdxkit.errors import (
    ConfigError,
    DanglingConnectiveError,
    DuplicateLicenseIdError,
    EmptyExpressionError,
    ExpectedConnectiveError,
    LicenseDataError,
    LicenseParseError,
    MissingConnectiveError,
    MixedConnectivesError,
    ParseErrorKind,
    RegistryFetchError,
    SpdxKitError,
    TrailingContentError,
    UnbalancedParensError,
    UnterminatedGroupError,
)
from spdxkit.license_tree import (
    ConjunctiveLicenseSet,
    DisjunctiveLicenseSet,
    LicenseNode,
    LicenseSet,
    NoAssertionLicense,
    NoneLicense,
    Operator,
    ProjectLicenseRef,
    StandardLicenseRef,
    license_ids,
    render,
    walk,
)
from spdxkit.parser import LicenseExpressionParser, parse_license_expression
from spdxkit.registry import LicenseInfo, LicenseRegistry
from spdxkit.verify import verify_license

__all__ = [
    'ConfigError',
    'ConjunctiveLicenseSet',
    'DanglingConnectiveError',
    'DisjunctiveLicenseSet',
    'DocumentLicenses',
    'DuplicateLicenseIdError',
    'EmptyExpressionError',
    'ExpectedConnectiveError',
    'LicenseDataError',
    'LicenseExpressionParser',
    'LicenseInfo',
    'LicenseNode',
    'LicenseParseError',
    'LicenseRefAllocator',
    'LicenseRegistry',
    'LicenseSet',
    'MissingConnectiveError',
    'MixedConnectivesError',
    'NoAssertionLicense',
    'NoneLicense',
    'Operator',
    'ParseErrorKind',
    'ProjectLicenseRef',
    'RegistryFetchError',
    'SpdxKitError',
    'StandardLicenseRef',
    'TrailingContentError',
    'UnbalancedParensError',
    'UnterminatedGroupError',
    'classify',
    'format_license_ref',
    'license_ids',
    'license_ref_number',
    'parse_license_expression',
    'render',
    'verify_license',
    'walk',
]
