"""
Predicate evaluation against recorded request bodies.

A predicate names a dotted path inside the JSON request body and the value
expected there. Values are compared as normalized text: the raw JSON text of
the resolved value, with one layer of string quotes removed, compared
case-insensitively. ``300`` and ``"300"`` therefore match the same
expectation, as do ``true`` and ``"True"``. Escape sequences inside strings
are compared as written, so ``"C:\\\\temp"`` matches ``C:\\\\temp``.
"""

import json
from typing import Any, Iterable, Optional

from dstest.core.models import TestCasePredicate, Transaction

_MISSING = object()


class _Number(str):
    """Numeric literal kept as its source text."""


def _resolve(document: Any, attribute: str) -> Any:
    """Walk a dotted path through objects (by key) and arrays (by index)."""
    if not attribute:
        return _MISSING
    
    current = document
    for segment in attribute.split("."):
        if isinstance(current, dict):
            if segment not in current:
                return _MISSING
            current = current[segment]
        elif isinstance(current, list):
            if not segment.isdigit() or int(segment) >= len(current):
                return _MISSING
            current = current[int(segment)]
        else:
            return _MISSING
    return current


def _raw_json(value: Any) -> str:
    """Render a parsed value back to compact JSON text."""
    if isinstance(value, _Number):
        return str(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, dict):
        members = (f"{_raw_json(key)}:{_raw_json(item)}" for key, item in value.items())
        return "{" + ",".join(members) + "}"
    return "[" + ",".join(_raw_json(item) for item in value) + "]"


def resolve_raw_value(request_body: str, attribute: str) -> Optional[str]:
    """
    Return the textual form of the value at ``attribute``.
    
    Numbers keep their literal source text, strings are returned as their
    JSON text without the surrounding quotes, ``true``/``false``/``null`` are
    returned as written and objects or arrays as compact JSON.
    
    Args:
        request_body: Serialized JSON request body
        attribute: Dot-separated path, e.g. ``amount.total``
        
    Returns:
        The normalized text, or None when the body is not usable JSON or the
        path does not resolve
    """
    if not isinstance(request_body, str) or not request_body.strip():
        return None
    
    try:
        document = json.loads(request_body, parse_int=_Number, parse_float=_Number)
        value = _resolve(document, attribute)
        if value is _MISSING:
            return None
        raw = _raw_json(value)
    except (ValueError, RecursionError):
        # Nesting too deep for the decoder counts as malformed
        return None
    
    if isinstance(value, str) and not isinstance(value, _Number):
        return raw[1:-1]
    return raw


def match_predicate(request_body: str, attribute: str, expected_value: str) -> bool:
    """
    Check one predicate against a request body.
    
    Never raises: a malformed body or an unresolvable path is simply a
    predicate that does not match.
    
    Args:
        request_body: Serialized JSON request body of a transaction
        attribute: Dot-separated JSON path
        expected_value: Expected value as authored in the test case
        
    Returns:
        bool: True if the value at the path equals the expectation, ignoring case
    """
    raw = resolve_raw_value(request_body, attribute)
    if raw is None:
        return False
    return raw.lower() == str(expected_value).lower()


def validate_predicates(predicates: Iterable[TestCasePredicate], transaction: Transaction) -> bool:
    """
    Check whether every predicate matches the transaction's request body.
    
    Stops at the first predicate that fails. An empty predicate list matches.
    """
    return all(
        match_predicate(transaction.request, predicate.attribute, predicate.expected_value)
        for predicate in predicates
    )
