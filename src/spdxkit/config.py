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

"""Configuration for spdxkit.

Settings come from three layers, highest first:

1. CLI flags (``--lenient``, ``--fetch-remote``, ``--license-list``).
2. Environment variables (``SPDXKIT_FETCH_REMOTE``,
   ``SPDXKIT_LICENSE_LIST``).
3. A config file: ``spdxkit.toml`` (top-level keys) or the
   ``[tool.spdxkit]`` table of ``pyproject.toml``.

Example ``spdxkit.toml``::

    license_list = "vendor/licenses.json"
    fetch_remote = false
    strict = true
    timeout = 5.0

Usage::

    from spdxkit.config import load_config, load_registry, resolve_config

    config = resolve_config(load_config(), strict=False)
    registry = load_registry(config)
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Final

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from spdxkit.errors import ConfigError, LicenseDataError, RegistryFetchError
from spdxkit.logging import get_logger
from spdxkit.registry import DEFAULT_TIMEOUT, SPDX_LICENSE_LIST_URL, LicenseRegistry

__all__ = [
    'CONFIG_FILENAME',
    'SpdxKitConfig',
    'load_config',
    'load_registry',
    'resolve_config',
]

log = get_logger('spdxkit.config')

CONFIG_FILENAME: Final[str] = 'spdxkit.toml'

_PYPROJECT: Final[str] = 'pyproject.toml'

_TRUTHY: Final[frozenset[str]] = frozenset({'1', 'true', 'yes'})


@dataclass(frozen=True)
class SpdxKitConfig:
    """Resolved spdxkit settings.

    Attributes:
        license_list: Registry file to load instead of the bundled data.
            ``.json`` files use the SPDX ``licenses.json`` format; any
            other suffix is read as TOML.
        license_list_url: Where :func:`load_registry` downloads the
            license list when ``fetch_remote`` is set.
        fetch_remote: Download the current SPDX license list.
        strict: Reject text after a bare top-level license id.
        timeout: HTTP timeout in seconds for remote fetches.
    """

    license_list: Path | None = None
    license_list_url: str = SPDX_LICENSE_LIST_URL
    fetch_remote: bool = False
    strict: bool = True
    timeout: float = DEFAULT_TIMEOUT


# Key -> accepted types.
_FIELDS: Final[dict[str, tuple[type, ...]]] = {
    'license_list': (str,),
    'license_list_url': (str,),
    'fetch_remote': (bool,),
    'strict': (bool,),
    'timeout': (int, float),
}


def _find_config(directory: Path) -> Path | None:
    candidate = directory / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    candidate = directory / _PYPROJECT
    if candidate.is_file():
        return candidate
    return None


def _read_table(path: Path) -> dict[str, Any]:
    try:
        with path.open('rb') as f:
            data = tomllib.load(f)
    except OSError as exc:
        raise ConfigError(f'cannot read {path}: {exc}') from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f'{path}: invalid TOML: {exc}') from exc
    if path.name == _PYPROJECT:
        tool = data.get('tool', {})
        if not isinstance(tool, dict):
            raise ConfigError(f'{path}: [tool] must be a table')
        table = tool.get('spdxkit', {})
        if not isinstance(table, dict):
            raise ConfigError(f'{path}: [tool.spdxkit] must be a table')
        return table
    return data


def load_config(path: Path | None = None) -> SpdxKitConfig:
    """Load settings from *path*, or look in the current directory.

    Without *path*, ``spdxkit.toml`` is preferred over ``pyproject.toml``.
    No file at all yields the defaults. A relative ``license_list`` is
    resolved against the config file's directory.

    Raises:
        ConfigError: If the file cannot be read, is not valid TOML, has
            unknown keys or values of the wrong type.
    """
    if path is None:
        path = _find_config(Path.cwd())
        if path is None:
            return SpdxKitConfig()
    table = _read_table(path)

    errors: list[str] = []
    for key, value in table.items():
        expected = _FIELDS.get(key)
        if expected is None:
            errors.append(f'unknown key {key!r}')
        elif not isinstance(value, expected) or (bool not in expected and isinstance(value, bool)):
            names = ' or '.join(t.__name__ for t in expected)
            errors.append(f'{key}: expected {names}, got {type(value).__name__}')
    if errors:
        raise ConfigError(f'{path}: ' + '; '.join(errors))

    config = SpdxKitConfig()
    if 'license_list' in table:
        config = replace(config, license_list=path.parent / table['license_list'])
    if 'license_list_url' in table:
        config = replace(config, license_list_url=table['license_list_url'])
    if 'fetch_remote' in table:
        config = replace(config, fetch_remote=table['fetch_remote'])
    if 'strict' in table:
        config = replace(config, strict=table['strict'])
    if 'timeout' in table:
        config = replace(config, timeout=float(table['timeout']))
    log.debug('config_loaded', path=str(path))
    return config


def resolve_config(
    base: SpdxKitConfig,
    *,
    strict: bool | None = None,
    fetch_remote: bool | None = None,
    license_list: Path | None = None,
) -> SpdxKitConfig:
    """Merge CLI flags and environment variables into *base*.

    Args:
        base: Settings from the config file.
        strict: ``False`` if ``--lenient`` was passed.
        fetch_remote: ``True`` if ``--fetch-remote`` was passed.
        license_list: Path from ``--license-list``.

    Returns:
        The resolved :class:`SpdxKitConfig`.
    """
    resolved_strict = base.strict
    resolved_fetch = base.fetch_remote
    resolved_list = base.license_list

    # Environment.
    env_fetch = os.environ.get('SPDXKIT_FETCH_REMOTE', '').strip().lower()
    if env_fetch:
        resolved_fetch = env_fetch in _TRUTHY
    env_list = os.environ.get('SPDXKIT_LICENSE_LIST', '').strip()
    if env_list:
        resolved_list = Path(env_list)

    # CLI flags.
    if strict is not None:
        resolved_strict = strict
    if fetch_remote is not None:
        resolved_fetch = fetch_remote
    if license_list is not None:
        resolved_list = license_list

    return replace(
        base,
        strict=resolved_strict,
        fetch_remote=resolved_fetch,
        license_list=resolved_list,
    )


def load_registry(config: SpdxKitConfig) -> LicenseRegistry:
    """Build the license registry *config* asks for.

    An explicit ``license_list`` file wins. Otherwise, with
    ``fetch_remote`` set, the SPDX list is downloaded; if that fails or the
    download is malformed, the bundled data is used and a warning is logged.

    Raises:
        ConfigError: If ``license_list`` does not exist.
        LicenseDataError: If the license list file is malformed.
    """
    if config.license_list is not None:
        path = config.license_list
        if not path.is_file():
            raise ConfigError(f'license list not found: {path}')
        if path.suffix.lower() == '.json':
            return LicenseRegistry.load_json(path)
        return LicenseRegistry.load(path)
    if config.fetch_remote:
        try:
            return LicenseRegistry.fetch(config.license_list_url, timeout=config.timeout)
        except (RegistryFetchError, LicenseDataError) as exc:
            log.warning(
                'license_list_fetch_failed',
                url=config.license_list_url,
                error=str(exc),
                hint='Falling back to the bundled license list.',
            )
    return LicenseRegistry.load()
