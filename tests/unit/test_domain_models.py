"""
Unit tests for the catalog domain models.

Tests for:
- Wire serialization (omitted optional fields, camelCase keys)
- Preservation of unknown keys from the stored file
- ExerciseCatalog lookups, id collection and canonical sorting
"""

import json

import pytest

from domain.models import (
    ExecutionType,
    Exercise,
    ExerciseCatalog,
    ExerciseGroup,
    SubVariation,
    Variation,
    collation_key,
)


SAMPLE_CATALOG = [
    {
        "group": "Legs",
        "items": [
            {
                "id": "squat",
                "name": "Squat",
                "variations": [
                    {
                        "id": "front-squat",
                        "name": "Front Squat",
                        "isUnilateral": False,
                        "subVariations": [
                            {
                                "id": "front-squat-box",
                                "name": "Box",
                                "isUnilateral": False,
                                "executionTypes": [
                                    {"id": "front-squat-box-paused", "name": "Paused", "isUnilateral": False}
                                ],
                            }
                        ],
                    }
                ],
            },
            {"id": "lunge", "name": "Lunge"},
        ],
    },
    {"group": "chest", "items": [{"id": "bench-press", "name": "Bench Press"}]},
]


# =============================================================================
# Serialization Tests
# =============================================================================


class TestTreeSerialization:
    """Tests for wire serialization of tree nodes."""

    @pytest.mark.unit
    def test_exercise_without_variations_omits_field(self):
        """An empty variations list is not serialized."""
        exercise = Exercise(id="bench-press", name="Bench Press")
        assert exercise.model_dump(by_alias=True) == {"id": "bench-press", "name": "Bench Press"}

    @pytest.mark.unit
    def test_node_uses_camel_case_keys(self):
        """Nested fields serialize with the file's camelCase keys."""
        variation = Variation(
            id="incline",
            name="Incline",
            image_url="https://img.example/incline.png",
            is_unilateral=True,
            sub_variations=[SubVariation(id="incline-db", name="Dumbbell", is_unilateral=False)],
        )
        data = variation.model_dump(by_alias=True)

        assert data["imageUrl"] == "https://img.example/incline.png"
        assert data["isUnilateral"] is True
        assert data["subVariations"] == [
            {"id": "incline-db", "name": "Dumbbell", "isUnilateral": False}
        ]

    @pytest.mark.unit
    def test_unset_image_url_is_omitted(self):
        """imageUrl is left out when not set."""
        node = ExecutionType(id="paused", name="Paused", is_unilateral=False)
        assert "imageUrl" not in node.model_dump(by_alias=True)

    @pytest.mark.unit
    def test_empty_children_omitted_at_every_level(self):
        """Empty child lists are dropped for sub-variations too."""
        node = SubVariation(id="box", name="Box", is_unilateral=False, execution_types=[])
        assert "executionTypes" not in node.model_dump(by_alias=True)

    @pytest.mark.unit
    def test_unknown_keys_are_preserved(self):
        """Keys the editor does not know survive a load/dump round trip."""
        raw = [{"group": "Chest", "icon": "chest.svg", "items": [
            {"id": "bench-press", "name": "Bench Press", "difficulty": 2}
        ]}]
        catalog = ExerciseCatalog.from_wire(raw)
        assert catalog.to_wire() == raw

    @pytest.mark.unit
    def test_missing_is_unilateral_stays_missing(self):
        """Stored nodes without isUnilateral are not rewritten with a default."""
        raw = [{"group": "Chest", "items": [
            {"id": "bench-press", "name": "Bench Press", "variations": [{"id": "incline", "name": "Incline"}]}
        ]}]
        assert ExerciseCatalog.from_wire(raw).to_wire() == raw

    @pytest.mark.unit
    def test_to_json_uses_two_space_indent_and_keeps_unicode(self):
        """The stored file is pretty-printed with literal non-ASCII text."""
        catalog = ExerciseCatalog.from_wire(
            [{"group": "Pecho", "items": [{"id": "press-banca", "name": "Press de Banca Inclinado Ñ"}]}]
        )
        text = catalog.to_json()

        assert text.startswith('[\n  {\n    "group": "Pecho"')
        assert "Ñ" in text
        assert json.loads(text) == catalog.to_wire()


# =============================================================================
# Catalog Tests
# =============================================================================


class TestExerciseCatalog:
    """Tests for ExerciseCatalog aggregate helpers."""

    @pytest.mark.unit
    def test_exercise_count(self):
        catalog = ExerciseCatalog.from_wire(SAMPLE_CATALOG)
        assert catalog.exercise_count == 3

    @pytest.mark.unit
    def test_all_ids_covers_all_levels(self):
        """Ids are collected from all four tree levels."""
        ids = ExerciseCatalog.from_wire(SAMPLE_CATALOG).all_ids()
        assert ids == {
            "squat",
            "front-squat",
            "front-squat-box",
            "front-squat-box-paused",
            "lunge",
            "bench-press",
        }

    @pytest.mark.unit
    def test_all_ids_excludes_whole_subtree_of_edited_exercise(self):
        """Excluding an exercise removes its nested ids too."""
        ids = ExerciseCatalog.from_wire(SAMPLE_CATALOG).all_ids(exclude_exercise_id="squat")
        assert ids == {"lunge", "bench-press"}

    @pytest.mark.unit
    def test_find_group_is_case_insensitive(self):
        catalog = ExerciseCatalog.from_wire(SAMPLE_CATALOG)
        assert catalog.find_group("CHEST").group == "chest"
        assert catalog.find_group("  legs ").group == "Legs"
        assert catalog.find_group("Back") is None

    @pytest.mark.unit
    def test_locate_exercise(self):
        catalog = ExerciseCatalog.from_wire(SAMPLE_CATALOG)
        group, index = catalog.locate_exercise("lunge")
        assert group.group == "Legs"
        assert index == 1
        assert catalog.locate_exercise("front-squat") is None

    @pytest.mark.unit
    def test_sort_orders_groups_and_items_case_insensitively(self):
        catalog = ExerciseCatalog.from_wire(SAMPLE_CATALOG)
        catalog.sort()

        assert [g.group for g in catalog.groups] == ["chest", "Legs"]
        assert [i.name for i in catalog.groups[1].items] == ["Lunge", "Squat"]

    @pytest.mark.unit
    def test_from_wire_rejects_wrong_shape(self):
        """A non-list document or a group without items name fails validation."""
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            ExerciseCatalog.from_wire({"group": "Chest"})
        with pytest.raises(ValidationError):
            ExerciseCatalog.from_wire([{"items": []}])

    @pytest.mark.unit
    def test_empty_catalog(self):
        assert ExerciseCatalog.empty().to_wire() == []


class TestCollationKey:
    """Tests for the name collation used in sorting."""

    @pytest.mark.unit
    def test_ignores_case(self):
        names = ["bench", "Arm", "curl"]
        assert sorted(names, key=collation_key) == ["Arm", "bench", "curl"]

    @pytest.mark.unit
    def test_ignores_accents(self):
        names = ["Zancada", "Élevation", "Dominada"]
        assert sorted(names, key=collation_key) == ["Dominada", "Élevation", "Zancada"]

    @pytest.mark.unit
    def test_group_matches(self):
        assert ExerciseGroup(group="Chest", items=[]).matches("chest")
