"""
Biodex Backend — Species Form Validation Tests
================================================

What:  Field rules and normalization of SpeciesForm.
Why:   The same form gates the card's submit and the PATCH endpoint.

What we test:
    ✅ Required, trimmed scientific name
    ✅ Blank optional text → None, other text trimmed, idempotent
    ✅ Kingdom closed set
    ✅ Population must be an integer ≥ 1 when present
    ✅ Image must be an absolute URL when present
    ✅ Every key required; unknown keys rejected
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from biodex.schemas.species import EDITABLE_FIELDS, SpeciesForm, blank_to_none


def make_draft(**overrides):
    draft = {
        "scientific_name": "Cavia porcellus",
        "common_name": "Guinea pig",
        "kingdom": "Animalia",
        "total_population": 300000,
        "image": None,
        "description": None,
    }
    draft.update(overrides)
    return draft


def error_fields(exc_info):
    return {error["loc"][0] for error in exc_info.value.errors()}


class TestScientificName:

    @pytest.mark.parametrize("value", ["", "   ", "\t\n"])
    def test_blank_rejected(self, value):
        with pytest.raises(PydanticValidationError) as exc_info:
            SpeciesForm.model_validate(make_draft(scientific_name=value))
        assert error_fields(exc_info) == {"scientific_name"}

    def test_none_rejected(self):
        with pytest.raises(PydanticValidationError) as exc_info:
            SpeciesForm.model_validate(make_draft(scientific_name=None))
        assert "scientific_name" in error_fields(exc_info)

    def test_trimmed(self):
        form = SpeciesForm.model_validate(make_draft(scientific_name="  Cavia aperea  "))
        assert form.scientific_name == "Cavia aperea"


class TestOptionalText:

    @pytest.mark.parametrize("field", ["common_name", "description", "image"])
    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_blank_becomes_none(self, field, value):
        form = SpeciesForm.model_validate(make_draft(**{field: value}))
        assert getattr(form, field) is None

    @pytest.mark.parametrize("field", ["common_name", "description"])
    def test_text_trimmed(self, field):
        form = SpeciesForm.model_validate(make_draft(**{field: "  Felis catus  "}))
        assert getattr(form, field) == "Felis catus"

    def test_normalization_idempotent(self):
        first = SpeciesForm.model_validate(
            make_draft(common_name="  Felis catus  ", description="   ", image=" https://example.org/cat.jpg ")
        )
        second = SpeciesForm.model_validate(first.to_patch())
        assert second.to_patch() == first.to_patch()
        assert first.common_name == "Felis catus"
        assert first.description is None
        assert first.image == "https://example.org/cat.jpg"

    def test_blank_to_none_leaves_non_text_alone(self):
        assert blank_to_none(5) == 5
        assert blank_to_none(None) is None


class TestKingdom:

    def test_every_kingdom_accepted(self):
        for kingdom in ["Animalia", "Plantae", "Fungi", "Protista", "Archaea", "Bacteria"]:
            assert SpeciesForm.model_validate(make_draft(kingdom=kingdom)).kingdom == kingdom

    @pytest.mark.parametrize("value", ["Chromista", "animalia", "", None])
    def test_outside_closed_set_rejected(self, value):
        with pytest.raises(PydanticValidationError) as exc_info:
            SpeciesForm.model_validate(make_draft(kingdom=value))
        assert error_fields(exc_info) == {"kingdom"}

    def test_patch_holds_plain_string(self):
        patch = SpeciesForm.model_validate(make_draft(kingdom="Fungi")).to_patch()
        assert patch["kingdom"] == "Fungi"
        assert type(patch["kingdom"]) is str


class TestPopulation:

    @pytest.mark.parametrize("value", [0, -5, 2.5, "12", True])
    def test_invalid_rejected(self, value):
        with pytest.raises(PydanticValidationError) as exc_info:
            SpeciesForm.model_validate(make_draft(total_population=value))
        assert error_fields(exc_info) == {"total_population"}

    @pytest.mark.parametrize("value", [1, 300000, None])
    def test_valid_accepted(self, value):
        assert SpeciesForm.model_validate(make_draft(total_population=value)).total_population == value


class TestImage:

    @pytest.mark.parametrize("value", ["not a url", "example.org/cat.jpg", "/relative/path.png"])
    def test_malformed_rejected(self, value):
        with pytest.raises(PydanticValidationError) as exc_info:
            SpeciesForm.model_validate(make_draft(image=value))
        assert error_fields(exc_info) == {"image"}

    def test_url_kept_as_typed(self):
        url = "https://upload.wikimedia.org/wikipedia/commons/thumb/3/30/George.jpg"
        assert SpeciesForm.model_validate(make_draft(image=url)).image == url


class TestShape:

    def test_patch_has_exactly_six_fields(self):
        patch = SpeciesForm.model_validate(make_draft()).to_patch()
        assert tuple(patch) == EDITABLE_FIELDS

    def test_missing_key_rejected(self):
        draft = make_draft()
        del draft["description"]
        with pytest.raises(PydanticValidationError) as exc_info:
            SpeciesForm.model_validate(draft)
        assert error_fields(exc_info) == {"description"}

    def test_owner_cannot_be_smuggled_in(self):
        with pytest.raises(PydanticValidationError) as exc_info:
            SpeciesForm.model_validate(make_draft(author="intruder"))
        assert error_fields(exc_info) == {"author"}
