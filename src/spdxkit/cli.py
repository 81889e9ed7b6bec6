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

"""Command-line interface for spdxkit.

Commands::

    spdxkit parse EXPR...         Print the canonical form of each expression.
    spdxkit verify EXPR...        Parse, then report verification warnings.
    spdxkit licenses [--search]   List the license ids the registry knows.

Exit codes:
    0  Success. ``verify`` warnings do not change the exit code.
    1  An expression failed to parse.
    2  Bad arguments, configuration or license data.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from spdxkit.config import load_config, load_registry, resolve_config
from spdxkit.errors import LicenseParseError, SpdxKitError
from spdxkit.license_tree import (
    LicenseNode,
    LicenseSet,
    NoAssertionLicense,
    NoneLicense,
    ProjectLicenseRef,
    StandardLicenseRef,
)
from spdxkit.logging import configure_logging, get_logger
from spdxkit.parser import LicenseExpressionParser
from spdxkit.registry import LicenseRegistry
from spdxkit.verify import verify_license

__all__ = [
    'build_parser',
    'main',
    'node_kind',
]

log = get_logger('spdxkit.cli')


def node_kind(node: LicenseNode) -> str:
    """Return a short label for the kind of *node*."""
    if isinstance(node, LicenseSet):
        return 'conjunctive set' if node.conjunctive else 'disjunctive set'
    if isinstance(node, StandardLicenseRef):
        return 'listed license'
    if isinstance(node, ProjectLicenseRef):
        return 'project license'
    if isinstance(node, NoneLicense):
        return 'none'
    if isinstance(node, NoAssertionLicense):
        return 'no assertion'
    raise TypeError(f'not a license node: {type(node).__name__}')


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for ``spdxkit``."""
    parser = argparse.ArgumentParser(
        prog='spdxkit',
        description='Parse and verify SPDX license expressions.',
    )
    parser.add_argument('--config', type=Path, help='Config file (spdxkit.toml or pyproject.toml).')
    parser.add_argument(
        '--lenient',
        action='store_true',
        help='Ignore text after a bare top-level license id instead of failing.',
    )
    parser.add_argument(
        '--fetch-remote',
        action='store_true',
        default=None,
        help='Download the current SPDX license list.',
    )
    parser.add_argument('--license-list', type=Path, help='License list file (TOML or SPDX licenses.json).')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging.')
    parser.add_argument('-q', '--quiet', action='store_true', help='Only log warnings and errors.')
    parser.add_argument('--json-log', action='store_true', help='Log as JSON lines.')

    sub = parser.add_subparsers(dest='command', required=True)

    p_parse = sub.add_parser('parse', help='Parse expressions and print their canonical form.')
    p_parse.add_argument('expressions', nargs='+', metavar='EXPR')

    p_verify = sub.add_parser('verify', help='Parse expressions and report verification warnings.')
    p_verify.add_argument('expressions', nargs='+', metavar='EXPR')

    p_licenses = sub.add_parser('licenses', help='List known SPDX license ids.')
    p_licenses.add_argument('--search', default='', help='Only ids or names containing this text.')
    return parser


def _cmd_parse(parser: LicenseExpressionParser, expressions: Sequence[str], console: Console, err: Console) -> int:
    status = 0
    for expression in expressions:
        try:
            tree = parser.parse(expression)
        except LicenseParseError as exc:
            err.print(f'[bold red]error[/]: {escape(str(exc))}', highlight=False, soft_wrap=True)
            status = 1
            continue
        console.print(f'{escape(str(tree))}  [dim]{node_kind(tree)}[/]', highlight=False, soft_wrap=True)
    return status


def _cmd_verify(parser: LicenseExpressionParser, expressions: Sequence[str], console: Console, err: Console) -> int:
    status = 0
    for expression in expressions:
        try:
            tree = parser.parse(expression)
        except LicenseParseError as exc:
            err.print(f'[bold red]error[/]: {escape(str(exc))}', highlight=False, soft_wrap=True)
            status = 1
            continue
        warnings = verify_license(tree, registry=parser.registry)
        if not warnings:
            console.print(f'[green]ok[/]: {escape(str(tree))}', highlight=False, soft_wrap=True)
            continue
        console.print(f'[bold yellow]warning[/]: {escape(str(tree))}', highlight=False, soft_wrap=True)
        for warning in warnings:
            console.print(f'  [cyan]-[/] {escape(warning)}', highlight=False, soft_wrap=True)
    return status


def _cmd_licenses(registry: LicenseRegistry, search: str, console: Console) -> int:
    needle = search.lower()
    table = Table(show_header=True, header_style='bold', show_edge=False, pad_edge=False)
    table.add_column('ID', style='bold', no_wrap=True)
    table.add_column('Name')
    table.add_column('OSI', justify='center')
    count = 0
    for license_id in registry:
        info = registry.info(license_id)
        if info is None:
            continue
        if needle and needle not in license_id.lower() and needle not in info.name.lower():
            continue
        name = f'{info.name} (deprecated)' if info.deprecated else info.name
        table.add_row(escape(license_id), escape(name), 'yes' if info.osi_approved else '')
        count += 1
    if count:
        console.print(table)
    version = f' (license list {registry.license_list_version})' if registry.license_list_version else ''
    console.print(f'{count} license(s){version}', highlight=False)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run ``spdxkit`` and return the exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)
    console = Console()
    err = Console(stderr=True)

    try:
        config = resolve_config(
            load_config(args.config),
            strict=False if args.lenient else None,
            fetch_remote=args.fetch_remote,
            license_list=args.license_list,
        )
        registry = load_registry(config)
    except (SpdxKitError, OSError) as exc:
        err.print(f'[bold red]error[/]: {escape(str(exc))}', highlight=False, soft_wrap=True)
        return 2
    log.debug('registry_ready', count=len(registry), version=registry.license_list_version)

    if args.command == 'licenses':
        return _cmd_licenses(registry, args.search, console)
    parser = LicenseExpressionParser(registry, strict=config.strict)
    if args.command == 'parse':
        return _cmd_parse(parser, args.expressions, console, err)
    return _cmd_verify(parser, args.expressions, console, err)


if __name__ == '__main__':
    sys.exit(main())
