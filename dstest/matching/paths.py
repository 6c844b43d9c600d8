"""
URL pattern matching for test cases.

Patterns are either literal paths or templates in which a segment starting
with ``:`` binds exactly one non-empty path segment (``/users/:id/orders``), so
``/users//orders`` does not match. A final ``*`` segment matches any
remainder, including nothing.
"""

import re
from functools import lru_cache
from typing import Dict, Optional, Pattern

from dstest.constants import PATH_PARAM_MARKER, PATH_WILDCARD


@lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> Pattern[str]:
    """
    Compile a templated URL pattern into an anchored regular expression.
    
    Args:
        pattern: URL pattern such as ``/users/:id/orders``
        
    Returns:
        Compiled regex with one named group per binding
    """
    segments = pattern.split("/")
    parts = []
    seen = set()

    for index, segment in enumerate(segments):
        if segment == PATH_WILDCARD and index == len(segments) - 1:
            parts.append("(?P<__wildcard>.*)")
        elif segment.startswith(PATH_PARAM_MARKER) and len(segment) > 1:
            name = segment[1:]
            # Regex group names must be unique identifiers
            if name.isidentifier() and not name.startswith("__") and name not in seen:
                seen.add(name)
                parts.append(f"(?P<{name}>[^/]+)")
            else:
                parts.append("[^/]+")
        else:
            parts.append(re.escape(segment))
    
    return re.compile("^" + "/".join(parts) + "$")


def extract_params(url: str, pattern: str) -> Optional[Dict[str, str]]:
    """
    Match ``url`` against ``pattern`` and return the bound segments.
    
    Returns:
        Mapping of binding name to segment value, or None if there is no match
    """
    match = compile_pattern(pattern).match(url)
    if match is None:
        return None
    return {name: value for name, value in match.groupdict().items() if not name.startswith("__")}


def url_matches(url: str, pattern: str) -> bool:
    """
    Decide whether an observed URL satisfies a test case's URL pattern.
    
    Exact equality wins first; otherwise the pattern is applied as a template.
    
    Args:
        url: Observed request path of a transaction
        pattern: Literal or templated path of a test case
        
    Returns:
        bool: True on an exact or templated match
    """
    if url == pattern:
        return True
    return extract_params(url, pattern) is not None
