"""
ExerciseCatalog aggregate root - the whole persisted document.

The catalog is an ordered list of named groups, each holding an ordered list
of exercises. It is persisted as one pretty-printed JSON array:

    [
      {
        "group": "Chest",
        "items": [{"id": "bench-press", "name": "Bench Press"}]
      }
    ]

Canonical order: groups sorted by name, items within a group sorted by name,
both with ``collation_key`` (case- and accent-insensitive).
"""

import json
import unicodedata
from typing import Any, Iterator, List, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field, RootModel

from domain.models.exercise import Exercise


def collation_key(text: str) -> Tuple[str, str]:
    """
    Sort key approximating a locale-aware, case-insensitive comparison.

    Accents are stripped and case folded for the primary key; the original
    text breaks ties so ordering is total and stable across runs.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


class ExerciseGroup(BaseModel):
    """A named bucket of exercises (usually a muscle group)."""

    model_config = ConfigDict(extra="allow")

    group: str = Field(..., description="Display name, unique case-insensitively")
    items: List[Exercise] = Field(default_factory=list)

    def matches(self, group_name: str) -> bool:
        """Case-insensitive name comparison."""
        return self.group.casefold() == group_name.strip().casefold()


class ExerciseCatalog(RootModel[List[ExerciseGroup]]):
    """
    Aggregate root for the exercise catalog document.

    Examples:
        >>> catalog = ExerciseCatalog.model_validate(
        ...     [{"group": "Chest", "items": [{"id": "bench-press", "name": "Bench Press"}]}]
        ... )
        >>> catalog.exercise_count
        1
        >>> "bench-press" in catalog.all_ids()
        True
    """

    root: List[ExerciseGroup] = Field(default_factory=list)

    @property
    def groups(self) -> List[ExerciseGroup]:
        return self.root

    @property
    def exercise_count(self) -> int:
        """Number of top-level exercises across all groups."""
        return sum(len(group.items) for group in self.root)

    def iter_exercises(self) -> Iterator[Tuple[ExerciseGroup, Exercise]]:
        for group in self.root:
            for item in group.items:
                yield group, item

    def all_ids(self, exclude_exercise_id: Optional[str] = None) -> Set[str]:
        """
        Collect every id at every tree level.

        Args:
            exclude_exercise_id: Top-level exercise whose whole subtree is
                left out (the entry being edited in place).

        Returns:
            Set of ids
        """
        ids: Set[str] = set()
        for _, exercise in self.iter_exercises():
            if exclude_exercise_id is not None and exercise.id == exclude_exercise_id:
                continue
            ids.update(exercise.iter_ids())
        return ids

    def find_group(self, group_name: str) -> Optional[ExerciseGroup]:
        """Find a group by case-insensitive name."""
        for group in self.root:
            if group.matches(group_name):
                return group
        return None

    def locate_exercise(self, exercise_id: str) -> Optional[Tuple[ExerciseGroup, int]]:
        """Return the owning group and item index of a top-level exercise."""
        for group in self.root:
            for index, item in enumerate(group.items):
                if item.id == exercise_id:
                    return group, index
        return None

    def get_exercise(self, exercise_id: str) -> Optional[Exercise]:
        located = self.locate_exercise(exercise_id)
        if located is None:
            return None
        group, index = located
        return group.items[index]

    def sort(self) -> None:
        """Re-sort groups and each group's items into canonical order in place."""
        self.root.sort(key=lambda g: collation_key(g.group))
        for group in self.root:
            group.items.sort(key=lambda item: collation_key(item.name))

    def to_wire(self) -> List[dict]:
        """Plain JSON-ready structure with empty optional fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Serialize exactly as the file is stored: 2-space indent, UTF-8 text."""
        return json.dumps(self.to_wire(), indent=2, ensure_ascii=False)

    @classmethod
    def empty(cls) -> "ExerciseCatalog":
        return cls(root=[])

    @classmethod
    def from_wire(cls, data: Any) -> "ExerciseCatalog":
        """Validate decoded JSON. Raises pydantic.ValidationError on bad shape."""
        return cls.model_validate(data)
