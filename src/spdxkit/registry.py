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

"""Registry of SPDX-listed license identifiers.

The registry answers one question during parsing: is this token a
license on the SPDX license list? It is built once per session, never
changes afterwards, and is passed explicitly to the classifier and
parser, so tests can use small fixed registries.

Sources:

1. **Bundled data** -- ``data/licenses.toml`` shipped with the package.
2. **Any TOML file** in the same format (``LicenseRegistry.load(path)``).
3. **SPDX license-list JSON** -- the ``licenses.json`` published by
   SPDX, either from disk (:meth:`LicenseRegistry.from_spdx_json`) or
   downloaded with httpx (:meth:`LicenseRegistry.fetch`).

Usage::

    from spdxkit.registry import LicenseRegistry

    registry = LicenseRegistry.load()
    registry.is_listed('MIT')  # True
    registry.is_listed('mit')  # False: ids are case-sensitive
    registry.standard_license('MIT').name  # 'MIT License'
"""

from __future__ import annotations

import json
import sys
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Final

import httpx

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from spdxkit.errors import LicenseDataError, RegistryFetchError
from spdxkit.license_tree import StandardLicenseRef
from spdxkit.logging import get_logger

__all__ = [
    'SPDX_LICENSE_LIST_URL',
    'LicenseInfo',
    'LicenseRegistry',
]

log = get_logger('spdxkit.registry')

#: Official machine-readable SPDX license list.
SPDX_LICENSE_LIST_URL: Final[str] = 'https://raw.githubusercontent.com/spdx/license-list-data/main/json/licenses.json'

#: Default HTTP timeout in seconds for :meth:`LicenseRegistry.fetch`.
DEFAULT_TIMEOUT: Final[float] = 10.0

_DATA_DIR = Path(__file__).resolve().parent / 'data'
_LICENSES_TOML = _DATA_DIR / 'licenses.toml'


@dataclass(frozen=True)
class LicenseInfo:
    """Metadata for one listed license.

    Attributes:
        license_id: Canonical SPDX identifier.
        name: Human-readable full name.
        osi_approved: Whether OSI has approved the license.
        see_also: Reference URLs.
        deprecated: Whether SPDX deprecated this id.
    """

    license_id: str
    name: str
    osi_approved: bool = False
    see_also: tuple[str, ...] = ()
    deprecated: bool = False


@dataclass(frozen=True, eq=False)
class LicenseRegistry:
    """Immutable set of SPDX-listed license ids plus their metadata.

    Attributes:
        licenses: Read-only mapping from SPDX id to :class:`LicenseInfo`.
        license_list_version: Version of the SPDX license list the data
            came from, or ``''`` if unknown.
    """

    licenses: Mapping[str, LicenseInfo] = field(default_factory=dict)
    license_list_version: str = ''

    def __post_init__(self) -> None:
        """Freeze the mapping so the registry cannot change after load."""
        object.__setattr__(self, 'licenses', MappingProxyType(dict(self.licenses)))

    # ── Construction ────────────────────────────────────────────────

    @classmethod
    def from_ids(cls, ids: Iterable[str], *, version: str = '') -> LicenseRegistry:
        """Build a registry from bare ids (names default to the id)."""
        return cls({i: LicenseInfo(license_id=i, name=i) for i in ids}, version)

    @classmethod
    def load(cls, path: Path | None = None) -> LicenseRegistry:
        """Load a registry from a TOML file.

        Args:
            path: TOML file in the bundled format. Defaults to the
                package's ``data/licenses.toml``.

        Raises:
            LicenseDataError: If any entry is malformed. All problems are
                collected before raising.
        """
        toml_path = path or _LICENSES_TOML
        try:
            with toml_path.open('rb') as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise LicenseDataError([f'{toml_path}: invalid TOML: {exc}']) from exc
        registry = cls._from_toml_data(data)
        log.debug(
            'license_registry_loaded',
            path=str(toml_path),
            count=len(registry),
            version=registry.license_list_version,
        )
        return registry

    @classmethod
    def _from_toml_data(cls, data: dict[str, Any]) -> LicenseRegistry:
        version = data.get('license_list_version', '')
        errors: list[str] = []
        if not isinstance(version, str):
            errors.append(f'license_list_version: expected string, got {type(version).__name__}')
            version = ''
        table = data.get('licenses', {})
        if not isinstance(table, dict):
            raise LicenseDataError([f'licenses: expected a table, got {type(table).__name__}'])
        licenses: dict[str, LicenseInfo] = {}
        for spdx_id, info in table.items():
            if not isinstance(info, dict):
                errors.append(f'[{spdx_id}]: expected a table, got {type(info).__name__}')
                continue
            name = info.get('name')
            if name is None:
                errors.append(f'[{spdx_id}]: missing required field "name"')
            elif not isinstance(name, str):
                errors.append(f'[{spdx_id}].name: expected string, got {type(name).__name__}')
            osi = info.get('osi_approved', False)
            if not isinstance(osi, bool):
                errors.append(f'[{spdx_id}].osi_approved: expected bool, got {type(osi).__name__}')
            see_also = info.get('see_also', [])
            if not isinstance(see_also, list) or not all(isinstance(u, str) for u in see_also):
                errors.append(f'[{spdx_id}].see_also: expected a list of strings')
                see_also = []
            deprecated = info.get('deprecated', False)
            if not isinstance(deprecated, bool):
                errors.append(f'[{spdx_id}].deprecated: expected bool, got {type(deprecated).__name__}')
            licenses[spdx_id] = LicenseInfo(
                license_id=spdx_id,
                name=name if isinstance(name, str) else spdx_id,
                osi_approved=osi is True,
                see_also=tuple(see_also),
                deprecated=deprecated is True,
            )
        if errors:
            raise LicenseDataError(errors)
        return cls(licenses, version)

    @classmethod
    def from_spdx_json(cls, data: Mapping[str, Any]) -> LicenseRegistry:
        """Build a registry from the SPDX ``licenses.json`` document.

        Raises:
            LicenseDataError: If the document has no ``licenses`` array or
                an entry lacks a ``licenseId`` or has a
                malformed ``seeAlso``.
        """
        entries = data.get('licenses')
        if not isinstance(entries, list):
            raise LicenseDataError(['"licenses" must be an array'])
        errors: list[str] = []
        licenses: dict[str, LicenseInfo] = {}
        for i, entry in enumerate(entries):
            spdx_id = entry.get('licenseId') if isinstance(entry, dict) else None
            if not isinstance(spdx_id, str) or not spdx_id:
                errors.append(f'licenses[{i}]: missing "licenseId"')
                continue
            see_also = entry.get('seeAlso', [])
            if not isinstance(see_also, list) or not all(isinstance(u, str) for u in see_also):
                errors.append(f'licenses[{i}].seeAlso: expected a list of strings')
                continue
            licenses[spdx_id] = LicenseInfo(
                license_id=spdx_id,
                name=str(entry.get('name', spdx_id)),
                osi_approved=bool(entry.get('isOsiApproved', False)),
                see_also=tuple(see_also),
                deprecated=bool(entry.get('isDeprecatedLicenseId', False)),
            )
        if errors:
            raise LicenseDataError(errors)
        return cls(licenses, str(data.get('licenseListVersion', '')))

    @classmethod
    def load_json(cls, path: Path) -> LicenseRegistry:
        """Load a registry from an SPDX ``licenses.json`` file on disk."""
        try:
            data = json.loads(path.read_text(encoding='utf-8'))
        except json.JSONDecodeError as exc:
            raise LicenseDataError([f'{path}: invalid JSON: {exc}']) from exc
        if not isinstance(data, dict):
            raise LicenseDataError([f'{path}: expected a JSON object'])
        return cls.from_spdx_json(data)

    @classmethod
    def fetch(
        cls,
        url: str = SPDX_LICENSE_LIST_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> LicenseRegistry:
        """Download the SPDX license list and build a registry from it.

        Raises:
            RegistryFetchError: On transport errors, a non-200 response,
                or a body that is not JSON.
            LicenseDataError: If the downloaded list fails validation.
        """
        try:
            resp = httpx.get(url, timeout=timeout, follow_redirects=True)
        except httpx.HTTPError as exc:
            raise RegistryFetchError(f'failed to fetch {url}: {exc}') from exc
        if resp.status_code != 200:
            raise RegistryFetchError(f'failed to fetch {url}: HTTP {resp.status_code}')
        try:
            data = resp.json()
        except ValueError as exc:
            raise RegistryFetchError(f'{url} did not return JSON') from exc
        if not isinstance(data, dict):
            raise RegistryFetchError(f'{url} did not return a JSON object')
        registry = cls.from_spdx_json(data)
        log.info(
            'license_registry_fetched',
            url=url,
            count=len(registry),
            version=registry.license_list_version,
        )
        return registry

    # ── Queries ─────────────────────────────────────────────────────

    def is_listed(self, license_id: str) -> bool:
        """Return ``True`` if *license_id* is on the list (case-sensitive)."""
        return license_id in self.licenses

    def __contains__(self, license_id: object) -> bool:
        """Support ``'MIT' in registry``."""
        return license_id in self.licenses

    def __len__(self) -> int:
        """Return the number of listed licenses."""
        return len(self.licenses)

    def __iter__(self) -> Iterator[str]:
        """Iterate over listed ids in sorted order."""
        return iter(sorted(self.licenses))

    def ids(self) -> list[str]:
        """Return all listed ids, sorted."""
        return sorted(self.licenses)

    def info(self, license_id: str) -> LicenseInfo | None:
        """Return metadata for *license_id*, or ``None`` if not listed."""
        return self.licenses.get(license_id)

    def standard_license(self, license_id: str) -> StandardLicenseRef:
        """Return a :class:`StandardLicenseRef` carrying the listed metadata.

        Unlisted ids still produce a bare reference; membership is the
        classifier's concern, not this method's.
        """
        info = self.licenses.get(license_id)
        if info is None:
            return StandardLicenseRef(license_id)
        return StandardLicenseRef(
            license_id,
            name=info.name,
            source_urls=info.see_also,
            osi_approved=info.osi_approved,
        )
