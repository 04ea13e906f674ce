"""
Numeric coercion for untrusted Tienda Nube payload values.

Tienda Nube reports the same amount as a string ("150.50", "150,50"),
a number, a small object ({"amount": "150.50"}) or not at all,
depending on store configuration and payment gateway. Everything in
this module converges those shapes to a finite Decimal or None.

Nothing here raises on bad input: None means "absent", never zero.
"""
import logging
import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional, Pattern, Tuple, Union

logger = logging.getLogger(__name__)

# Probed in this order on object-shaped values. Amount-like keys come
# before the generic "value" so unrelated numeric metadata is not picked up.
AMOUNT_KEYS = ("amount", "value", "total", "price", "fee", "net")

DEFAULT_SEARCH_DEPTH = 3

# Leading floating point literal, same tolerance as JavaScript parseFloat
# ("12.5 ARS" -> 12.5).
_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _finite(value: Decimal) -> Optional[Decimal]:
    if not value.is_finite() or not math.isfinite(float(value)):
        return None
    return value


def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Coerce a raw payload value to a finite Decimal.

    Args:
        value: None, number, string or mapping from the payload

    Returns:
        Finite Decimal, or None when the value is absent or unusable

    Example:
        >>> to_decimal("150,50")
        Decimal('150.50')
        >>> to_decimal({"amount": "10"})
        Decimal('10')
        >>> to_decimal("") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        return _finite(value)

    if isinstance(value, int):
        return Decimal(value)

    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return Decimal(str(value))

    if isinstance(value, str):
        trimmed = value.strip()
        if not trimmed:
            return None
        match = _FLOAT_PREFIX.match(trimmed.replace(",", ".", 1))
        if not match:
            return None
        try:
            parsed = Decimal(match.group(0))
        except InvalidOperation:
            return None
        return _finite(parsed)

    if isinstance(value, Mapping):
        for key in AMOUNT_KEYS:
            if key in value:
                parsed = to_decimal(value[key])
                if parsed is not None:
                    return parsed

    return None


def to_decimal_or_zero(value: Any) -> Decimal:
    """Coerce to Decimal, treating absent as zero."""
    parsed = to_decimal(value)
    return parsed if parsed is not None else Decimal("0")


def _children(node: Any) -> Iterable[Tuple[str, Any]]:
    """Child entries of an object or array node; scalars have none."""
    if isinstance(node, Mapping):
        return ((str(key), child) for key, child in node.items())
    if isinstance(node, (list, tuple)):
        return ((str(index), child) for index, child in enumerate(node))
    return ()


def find_numeric_by_pattern(
    value: Any,
    pattern: Union[str, Pattern[str]],
    max_depth: int = DEFAULT_SEARCH_DEPTH,
) -> Optional[Decimal]:
    """
    Find the first numeric value whose key matches ``pattern``.

    Last-resort lookup used when every canonical field is absent, e.g.
    scanning the order's ``extra`` bag for anything that looks like a
    commission. Keys are matched case-insensitively. For each key, a
    matching key whose value coerces wins; otherwise the child is
    searched before moving on to the next key. Nodes below
    ``max_depth`` (root is depth 0) are not inspected.

    Args:
        value: Arbitrary nested structure (mappings, lists, scalars)
        pattern: Regex (string or compiled) matched against key names
        max_depth: Maximum nesting depth to inspect

    Returns:
        First matching finite Decimal, or None
    """
    if isinstance(pattern, str):
        regex = re.compile(pattern, re.IGNORECASE)
    else:
        regex = re.compile(pattern.pattern, pattern.flags | re.IGNORECASE)
    return _walk(value, regex, 0, max_depth)


def _walk(node: Any, regex: Pattern[str], depth: int, max_depth: int) -> Optional[Decimal]:
    if not node or depth > max_depth:
        return None

    for key, child in _children(node):
        if regex.search(key):
            direct = to_decimal(child)
            if direct is not None:
                logger.debug(f"[COERCION] Pattern {regex.pattern!r} matched key {key!r} at depth {depth}")
                return direct

        nested = _walk(child, regex, depth + 1, max_depth)
        if nested is not None:
            return nested

    return None
