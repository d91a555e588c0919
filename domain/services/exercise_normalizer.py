"""
Validation and normalization of submitted exercise trees.

A submission arrives as loosely typed nested dicts (decoded form data). This
module walks it top-down, one tree level at a time, and produces the typed
catalog entities from domain.models.exercise.

Rules applied to every node, at every level:
1. ``id`` and ``name`` are trimmed; an empty name is rejected.
2. ``id`` must match ``^[a-z0-9-]+$``.
3. ``id`` must not already be known (catalog-wide) nor repeat a sibling's.
4. Accepted ids are added to the shared ``seen_ids`` set, so deeper levels
   and later siblings are checked against them.
5. ``isUnilateral`` is True only for the string "true" (or boolean True).
6. Children are normalized with the next level's rules.

The first failing rule raises ExerciseValidationError and aborts the walk.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Set, Type

from domain.exceptions import ExerciseValidationError, ValidationErrorKind
from domain.models.catalog import collation_key
from domain.models.exercise import (
    ExecutionType,
    Exercise,
    SubVariation,
    TreeNode,
    Variation,
)

logger = logging.getLogger(__name__)

# Wire-visible identifier syntax shared with the downstream app
ID_PATTERN = re.compile(r"^[a-z0-9-]+$")


@dataclass(frozen=True)
class TreeLevel:
    """Describes one level of the tree below the exercise."""

    label: str
    model: Type[TreeNode]
    children_key: Optional[str] = None
    child: Optional["TreeLevel"] = None


EXECUTION_TYPE_LEVEL = TreeLevel(label="Execution type", model=ExecutionType)
SUB_VARIATION_LEVEL = TreeLevel(
    label="Sub-variation",
    model=SubVariation,
    children_key="executionTypes",
    child=EXECUTION_TYPE_LEVEL,
)
VARIATION_LEVEL = TreeLevel(
    label="Variation",
    model=Variation,
    children_key="subVariations",
    child=SUB_VARIATION_LEVEL,
)


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _as_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return _clean(value) == "true"


def _iter_raw(raw_nodes: Any) -> Iterable[Mapping[str, Any]]:
    if not raw_nodes:
        return []
    if isinstance(raw_nodes, Mapping):
        # A form list that lost its array shape (e.g. a single unindexed entry)
        raw_nodes = list(raw_nodes.values())
    return [node for node in raw_nodes if isinstance(node, Mapping)]


def check_entry(
    entry_id: str,
    name: str,
    label: str,
    seen_ids: Set[str],
    sibling_ids: Optional[Set[str]] = None,
) -> None:
    """
    Apply the per-node rules to an already trimmed id/name pair.

    Registers the id in ``seen_ids`` (and ``sibling_ids``) when valid.

    Raises:
        ExerciseValidationError: On the first rule that fails
    """
    if not name:
        raise ExerciseValidationError(
            ValidationErrorKind.EMPTY_NAME,
            f"{label} name is empty" + (f" (id '{entry_id}')." if entry_id else "."),
            level=label,
            entry_id=entry_id or None,
        )
    if not ID_PATTERN.match(entry_id):
        raise ExerciseValidationError(
            ValidationErrorKind.INVALID_ID,
            f"{label} id '{entry_id}' is invalid. "
            "Use lowercase letters, numbers, and hyphens only.",
            level=label,
            entry_id=entry_id,
        )
    if sibling_ids is not None and entry_id in sibling_ids:
        raise ExerciseValidationError(
            ValidationErrorKind.DUPLICATE_ID,
            f"{label} id '{entry_id}' is repeated at the same level.",
            level=label,
            entry_id=entry_id,
        )
    if entry_id in seen_ids:
        raise ExerciseValidationError(
            ValidationErrorKind.DUPLICATE_ID,
            f"{label} id '{entry_id}' already exists.",
            level=label,
            entry_id=entry_id,
        )

    if sibling_ids is not None:
        sibling_ids.add(entry_id)
    seen_ids.add(entry_id)


def normalize_nodes(
    raw_nodes: Any,
    level: TreeLevel,
    seen_ids: Set[str],
) -> List[TreeNode]:
    """
    Validate and normalize the nodes of one tree level, recursing downwards.

    Args:
        raw_nodes: Sequence of mappings as decoded from the form (None or
            empty means no nodes at this level)
        level: Rules for this level (label, model, where children live)
        seen_ids: Ids already taken anywhere in the catalog; mutated

    Returns:
        Normalized nodes in submission order

    Raises:
        ExerciseValidationError: On the first rule that fails
    """
    sibling_ids: Set[str] = set()
    nodes: List[TreeNode] = []

    for raw in _iter_raw(raw_nodes):
        entry_id = _clean(raw.get("id"))
        name = _clean(raw.get("name"))
        check_entry(entry_id, name, level.label, seen_ids, sibling_ids)

        fields = {
            "id": entry_id,
            "name": name,
            "image_url": _clean(raw.get("imageUrl")) or None,
            "is_unilateral": _as_flag(raw.get("isUnilateral")),
        }
        if level.child is not None and level.children_key:
            children = normalize_nodes(raw.get(level.children_key), level.child, seen_ids)
            fields[level.model.child_field] = children

        nodes.append(level.model(**fields))

    return nodes


def normalize_exercise(
    base_id: Any,
    base_name: Any,
    raw_variations: Any,
    seen_ids: Set[str],
) -> Exercise:
    """
    Validate and normalize a whole submitted exercise tree.

    Args:
        base_id: Submitted exercise id
        base_name: Submitted exercise name
        raw_variations: Submitted variations (each optionally nesting
            ``subVariations`` and ``executionTypes``)
        seen_ids: Ids already taken in the catalog; mutated with every
            accepted id

    Returns:
        The normalized Exercise, variations sorted by name

    Raises:
        ExerciseValidationError: On the first rule that fails
    """
    exercise_id = _clean(base_id)
    name = _clean(base_name)
    check_entry(exercise_id, name, "Base exercise", seen_ids)

    variations = normalize_nodes(raw_variations, VARIATION_LEVEL, seen_ids)
    variations.sort(key=lambda v: collation_key(v.name))

    logger.debug(
        "Normalized exercise %s with %d variation(s)", exercise_id, len(variations)
    )
    return Exercise(id=exercise_id, name=name, variations=variations)
