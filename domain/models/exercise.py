"""
Exercise catalog tree entities.

The global exercise catalog is a strict four-level tree:

    Exercise -> Variation -> SubVariation -> ExecutionType

Every node carries an ``id`` (unique across the whole catalog) and a display
``name``. Below the exercise level, nodes also carry an optional ``imageUrl``
and an ``isUnilateral`` flag.

Children are always lists in memory. On the wire (and in the persisted JSON
file) an empty child list, an unset ``imageUrl`` and an unset
``isUnilateral`` are omitted entirely, which is the shape the downstream app
reads.

Examples:
    >>> variation = Variation(
    ...     id="incline-bench-press",
    ...     name="Incline",
    ...     is_unilateral=False,
    ... )
    >>> variation.model_dump(by_alias=True)
    {'id': 'incline-bench-press', 'name': 'Incline', 'isUnilateral': False}
"""

from typing import Any, ClassVar, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel


class CatalogEntry(BaseModel):
    """
    Base for every node of the catalog tree.

    Unknown keys found in the stored file are kept (``extra="allow"``) so a
    rewrite never drops data the editor does not know about.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    # Name of the attribute holding the next tree level, None for leaves
    child_field: ClassVar[Optional[str]] = None
    # Fields dropped from serialized output when None or empty
    omit_when_empty: ClassVar[Tuple[str, ...]] = ()

    id: str = Field(..., description="Catalog-wide unique slug")
    name: str = Field(..., description="Display name")

    @model_serializer(mode="wrap")
    def _omit_empty_fields(self, handler) -> Any:
        data = handler(self)
        if not isinstance(data, dict):
            return data
        fields = type(self).model_fields
        for name in self.omit_when_empty:
            for key in (name, fields[name].alias):
                if key in data and data[key] in (None, []):
                    del data[key]
        return data

    @property
    def children(self) -> List["CatalogEntry"]:
        """Nodes of the next tree level (empty for leaves)."""
        if self.child_field is None:
            return []
        return getattr(self, self.child_field)

    def iter_ids(self) -> Iterator[str]:
        """Yield this node's id followed by every descendant id, depth-first."""
        yield self.id
        for child in self.children:
            yield from child.iter_ids()


class TreeNode(CatalogEntry):
    """Shared shape of the three levels below an exercise."""

    omit_when_empty: ClassVar[Tuple[str, ...]] = ("image_url", "is_unilateral")

    image_url: Optional[str] = Field(default=None, description="Illustration URL")
    is_unilateral: Optional[bool] = Field(
        default=None,
        description="Whether the movement is performed one side at a time",
    )


class ExecutionType(TreeNode):
    """Leaf level: a way of executing a sub-variation (tempo, grip, ...)."""


class SubVariation(TreeNode):
    """Third level of the tree."""

    child_field: ClassVar[Optional[str]] = "execution_types"
    omit_when_empty: ClassVar[Tuple[str, ...]] = (
        "image_url",
        "is_unilateral",
        "execution_types",
    )

    execution_types: List[ExecutionType] = Field(default_factory=list)


class Variation(TreeNode):
    """Second level of the tree."""

    child_field: ClassVar[Optional[str]] = "sub_variations"
    omit_when_empty: ClassVar[Tuple[str, ...]] = (
        "image_url",
        "is_unilateral",
        "sub_variations",
    )

    sub_variations: List[SubVariation] = Field(default_factory=list)


class Exercise(CatalogEntry):
    """
    Top-level catalog entry.

    Examples:
        >>> Exercise(id="bench-press", name="Bench Press").model_dump(by_alias=True)
        {'id': 'bench-press', 'name': 'Bench Press'}
    """

    child_field: ClassVar[Optional[str]] = "variations"
    omit_when_empty: ClassVar[Tuple[str, ...]] = ("variations",)

    variations: List[Variation] = Field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"
