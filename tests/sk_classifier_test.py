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

"""Tests for spdxkit.classifier."""

from __future__ import annotations

import pytest
from spdxkit.classifier import classify
from spdxkit.license_tree import (
    NoAssertionLicense,
    NoneLicense,
    ProjectLicenseRef,
    StandardLicenseRef,
)
from spdxkit.registry import LicenseInfo, LicenseRegistry


@pytest.fixture
def registry() -> LicenseRegistry:
    """Small registry with metadata for MIT."""
    return LicenseRegistry(
        {
            'MIT': LicenseInfo(
                'MIT',
                'MIT License',
                osi_approved=True,
                see_also=('https://opensource.org/license/mit/',),
            ),
            'Apache-2.0': LicenseInfo('Apache-2.0', 'Apache License 2.0', osi_approved=True),
        },
        '3.25',
    )


class TestClassify:
    """Tests for classify()."""

    def test_none_sentinel(self, registry: LicenseRegistry) -> None:
        """Test none sentinel."""
        assert classify('NONE', registry) == NoneLicense()

    def test_noassertion_sentinel(self, registry: LicenseRegistry) -> None:
        """Test noassertion sentinel."""
        assert classify('NOASSERTION', registry) == NoAssertionLicense()

    @pytest.mark.parametrize('token', ['none', 'None', 'noassertion', 'NoAssertion'])
    def test_sentinels_case_sensitive(self, registry: LicenseRegistry, token: str) -> None:
        """Only the upper-case spellings are sentinels."""
        assert classify(token, registry) == ProjectLicenseRef(token)

    def test_listed_id(self, registry: LicenseRegistry) -> None:
        """Test listed id."""
        node = classify('MIT', registry)
        assert isinstance(node, StandardLicenseRef)
        assert node == StandardLicenseRef('MIT')

    def test_listed_id_carries_metadata(self, registry: LicenseRegistry) -> None:
        """Test listed id carries metadata."""
        node = classify('MIT', registry)
        assert isinstance(node, StandardLicenseRef)
        assert node.name == 'MIT License'
        assert node.osi_approved is True
        assert node.source_urls == ('https://opensource.org/license/mit/',)

    def test_listed_lookup_case_sensitive(self, registry: LicenseRegistry) -> None:
        """Test listed lookup case sensitive."""
        assert classify('mit', registry) == ProjectLicenseRef('mit')

    def test_license_ref(self, registry: LicenseRegistry) -> None:
        """Test license ref."""
        assert classify('LicenseRef-12', registry) == ProjectLicenseRef('LicenseRef-12')

    def test_malformed_token_still_classified(self, registry: LicenseRegistry) -> None:
        """Classification never fails, even for odd tokens."""
        assert classify('x', registry) == ProjectLicenseRef('x')

    def test_empty_registry(self) -> None:
        """Test empty registry."""
        assert classify('MIT', LicenseRegistry()) == ProjectLicenseRef('MIT')
