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

"""Structured logging for spdxkit.

Configures `structlog <https://www.structlog.org/>`_ with two output modes:

- **Console** (default): human-readable output, colored on a TTY.
- **JSON** (``--json-log``): one JSON object per line.

Both modes write to stderr so stdout stays clean for piped output
(e.g. ``spdxkit parse '(MIT OR ISC)' | wc -l``).

License texts and long expressions can be kilobytes long, so string
fields longer than :data:`MAX_VALUE_LENGTH` are shortened before
rendering. Set ``SPDXKIT_LOG_FULL_VALUES=1`` to keep them intact.

Usage::

    from spdxkit.logging import configure_logging, get_logger

    configure_logging(verbose=True)
    log = get_logger('spdxkit.parser')
    log.debug('parsed_expression', expression='(MIT OR ISC)')
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Final

import structlog

__all__ = [
    'MAX_VALUE_LENGTH',
    'configure_logging',
    'get_logger',
    'truncate_long_values',
]

#: Longest string field rendered verbatim.
MAX_VALUE_LENGTH: Final[int] = 200

_ELLIPSIS = '...'

# Populated by configure_logging(); read by the processor.
_truncation_enabled: bool = True


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
) -> None:
    """Configure structlog for spdxkit.

    Should be called once at startup, before any logging calls. Calling
    it again reconfigures logging in place.

    Args:
        verbose: Enable debug-level output.
        quiet: Suppress info-level output (only warnings and errors).
        json_log: Use JSON output instead of console output.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        format='%(message)s',
        stream=sys.stderr,
        level=level,
        force=True,
    )

    global _truncation_enabled  # noqa: PLW0603
    _truncation_enabled = os.environ.get('SPDXKIT_LOG_FULL_VALUES', '0') != '1'

    shared_processors: list[structlog.types.Processor] = [  # type: ignore[assignment]
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        truncate_long_values,
    ]

    if json_log:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
        )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def get_logger(name: str = 'spdxkit') -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger.

    Args:
        name: Logger name, used for filtering and identification.

    Returns:
        A :class:`structlog.stdlib.BoundLogger` instance.
    """
    return structlog.get_logger(name)


def _shorten(value: object) -> object:
    if not isinstance(value, str) or len(value) <= MAX_VALUE_LENGTH:
        return value
    return value[: MAX_VALUE_LENGTH - len(_ELLIPSIS)] + _ELLIPSIS


def truncate_long_values(
    logger: Any,  # noqa: ANN401
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor: shorten oversized string fields.

    The ``event`` name itself is never shortened.
    """
    if not _truncation_enabled:
        return event_dict
    return {k: v if k == 'event' else _shorten(v) for k, v in event_dict.items()}
