"""
Decoding of bracket-notation form fields into nested structures.

The editor page posts nested lists the way browsers do for indexed inputs:

    variations[0][id]=incline
    variations[0][subVariations][1][executionTypes][0][name]=Paused

parse_nested_form turns the flat field list into dicts and lists:

    {"variations": [{"id": "incline", "subVariations": [...]}]}

Mappings whose keys are all integers become lists ordered by index, with
gaps compacted. Empty brackets (``tags[]``) append. A repeated scalar field
keeps its last value.
"""

import re
from typing import Any, Dict, Iterable, List, Tuple

MAX_DEPTH = 10

_SEGMENT_RE = re.compile(r"\[([^\[\]]*)\]")
_INDEX_RE = re.compile(r"[0-9]+")


def split_key(key: str) -> List[str]:
    """
    Split ``a[b][0][]`` into ``["a", "b", "0", ""]``.

    Anything that does not follow the bracket grammar, or goes deeper than
    MAX_DEPTH, is kept as a literal trailing segment.
    """
    head, bracket, _ = key.partition("[")
    if not bracket or not head:
        return [key]

    segments = [head]
    rest = key[len(head):]
    position = 0
    for match in _SEGMENT_RE.finditer(rest):
        if match.start() != position or len(segments) > MAX_DEPTH:
            break
        segments.append(match.group(1))
        position = match.end()

    if position < len(rest):
        segments.append(rest[position:])
    return segments


def _is_index(key: str) -> bool:
    """ASCII digits only; Unicode digits such as "²" stay literal keys."""
    return _INDEX_RE.fullmatch(key) is not None


def _assign(container: Dict[str, Any], segments: List[str], value: Any) -> None:
    node = container
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        if segment == "":
            # "[]" appends after the highest index in use
            indices = [int(k) for k in node if _is_index(k)]
            segment = str(max(indices) + 1 if indices else 0)
        if last:
            node[segment] = value
            return
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {}
            node[segment] = child
        node = child


def _listify(value: Any) -> Any:
    if not isinstance(value, dict):
        return value
    converted = {key: _listify(child) for key, child in value.items()}
    if converted and all(_is_index(key) for key in converted):
        return [converted[key] for key in sorted(converted, key=int)]
    return converted


def parse_nested_form(items: Iterable[Tuple[str, Any]]) -> Dict[str, Any]:
    """
    Build a nested mapping from ``(key, value)`` form pairs.

    Args:
        items: Form fields in submission order (e.g. ``FormData.multi_items()``)

    Returns:
        Nested dict with integer-indexed groups turned into lists
    """
    root: Dict[str, Any] = {}
    for key, value in items:
        if not key:
            continue
        _assign(root, split_key(key), value)

    return {key: _listify(value) for key, value in root.items()}
