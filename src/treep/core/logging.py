# src/treep/core/logging.py
"""Log output for applications embedding treep.

treep modules emit structlog events under the "treep" logger namespace
(structlog.get_logger(__name__)) and never configure output themselves:

    Graph built              debug    nodes, leaves, branches, dangling
    Dangling reference       debug    source_id, target_id, position
    Duplicate record id      warning  record_id, positions
    Missing required fields  warning  missing, index

configure_logging() gives those events a handler on the "treep" stdlib
logger only. Handlers the host application installed on the root logger
are left untouched, and treep events do not propagate to them.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import IO, Any

import structlog
from structlog.stdlib import ProcessorFormatter

from treep.core.config import LoggingConfig, coerce_config

TREEP_LOGGER = "treep"

# Event keys that carry record identity values
_ID_FIELDS = ("record_id", "source_id", "target_id")


def _render_record_ids(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Render record ids that are not JSON scalars with repr().

    Ids are any hashable value, so a tuple id would otherwise come out as a
    JSON array and a frozenset id would not serialize at all.
    """
    for key in _ID_FIELDS:
        if key not in event_dict:
            continue
        value = event_dict[key]
        if value is not None and not isinstance(value, str | int | float):
            event_dict[key] = repr(value)
    return event_dict


def configure_logging(
    config: LoggingConfig | Mapping[str, Any] | None = None,
    *,
    stream: IO[str] | None = None,
    **options: Any,
) -> logging.Logger:
    """Route treep's structlog events to a stream.

    Args:
        config: LoggingConfig, an equivalent mapping, or None for defaults
            (level="WARNING", json_output=False)
        stream: Destination, sys.stderr by default
        **options: Overrides for individual config options

    Returns:
        The configured "treep" stdlib logger

    Raises:
        pydantic.ValidationError: If the level or another option is invalid
    """
    cfg = coerce_config(LoggingConfig, config, options)

    shared_processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _render_record_ids,
    ]
    if cfg.json_output:
        renderer: Any = structlog.processors.JSONRenderer()
        final_processors: list[Any] = [
            ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ]
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
        final_processors = [ProcessorFormatter.remove_processors_meta, renderer]

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Caching would pin module-level loggers to the first configuration
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(ProcessorFormatter(processors=final_processors, foreign_pre_chain=shared_processors[1:]))

    treep_logger = logging.getLogger(TREEP_LOGGER)
    treep_logger.handlers = [handler]
    treep_logger.setLevel(cfg.level)
    treep_logger.propagate = False
    return treep_logger
