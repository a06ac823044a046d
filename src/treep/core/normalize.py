# src/treep/core/normalize.py
"""Recursive type coercion for loosely-typed JSON.

External APIs frequently ship every scalar as a string ("42", "true").
normalize() walks objects and arrays depth-first and converts such strings
back to native values, and checks that required top-level fields exist.

Coercion rules, tried in order on every string scalar:
    1. "true" / "false" (case-sensitive) -> True / False
    2. JSON-style numeric literal -> int (no fraction/exponent) or float
    3. anything else -> unchanged

The input is never mutated; a structurally equivalent copy is returned.
Output strings are exactly the strings that matched no rule, so
normalizing twice is the same as normalizing once.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any

import structlog

from treep.contracts.errors import MissingFieldError
from treep.contracts.types import JSONValue
from treep.core.config import NormalizeConfig, coerce_config

logger = structlog.get_logger(__name__)

# Optional sign, integer part with optional fraction (or a bare fraction),
# optional exponent. Deliberately excludes "inf", "nan", "0x1f", "1_000"
# and surrounding whitespace, all of which float() would accept.
_NUMERIC_LITERAL = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_INTEGER_LITERAL = re.compile(r"-?\d+", re.ASCII)

_BOOLEAN_LITERALS: dict[str, bool] = {"true": True, "false": False}


def normalize(
    value: JSONValue,
    config: NormalizeConfig | Mapping[str, Any] | None = None,
    **options: Any,
) -> JSONValue:
    """Coerce string scalars to native types and check required fields.

    Args:
        value: JSON-shaped value (object, array or scalar)
        config: NormalizeConfig, an equivalent mapping, or None for defaults
        **options: Overrides for individual config options
            (type_conversions, required_fields)

    Returns:
        Normalized copy of value

    Raises:
        MissingFieldError: If a required field is absent from the top-level
            object (or from any top-level array element)
        pydantic.ValidationError: If the options are invalid
    """
    cfg = coerce_config(NormalizeConfig, config, options)

    if cfg.required_fields:
        check_required_fields(value, cfg.required_fields)

    if not cfg.type_conversions:
        return _copy(value, _identity)
    return _copy(value, convert_scalar)


def check_required_fields(value: Any, required_fields: Sequence[str]) -> None:
    """Check required field names against the top level of value.

    A top-level array is treated as a collection of records: every element
    is checked and the error reports the first failing element's index.

    Raises:
        MissingFieldError: Listing every missing name of the failing record
    """
    if isinstance(value, list | tuple):
        for index, item in enumerate(value):
            _check_record(item, required_fields, index=index)
        return
    _check_record(value, required_fields, index=None)


def _check_record(record: Any, required_fields: Sequence[str], *, index: int | None) -> None:
    if isinstance(record, Mapping):
        missing = [name for name in required_fields if name not in record]
    else:
        missing = list(required_fields)
    if missing:
        logger.warning("Missing required fields", missing=missing, index=index)
        raise MissingFieldError(missing, index=index)


def convert_scalar(value: Any) -> Any:
    """Convert a string scalar to its likely native type.

    Non-strings, and strings matching no rule, are returned unchanged.
    """
    if not isinstance(value, str):
        return value

    if value in _BOOLEAN_LITERALS:
        return _BOOLEAN_LITERALS[value]

    if _NUMERIC_LITERAL.fullmatch(value):
        if _INTEGER_LITERAL.fullmatch(value):
            try:
                return int(value)
            except ValueError:
                # Beyond sys.get_int_max_str_digits(); float() decides below
                pass
        number = float(value)
        # "1e999" overflows to inf, which is not a finite number
        if math.isfinite(number):
            return number

    return value


def _identity(value: Any) -> Any:
    return value


def _copy(value: Any, convert: Callable[[Any], Any]) -> Any:
    """Depth-first structural copy applying convert to every scalar."""
    if isinstance(value, Mapping):
        return {key: _copy(item, convert) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_copy(item, convert) for item in value]
    return convert(value)
