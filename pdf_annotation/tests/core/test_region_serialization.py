"""Tests for region serialization."""

import pytest

from pdf_annotation.core.annotation import (
    Region,
    derive_region,
    deserialize_region,
    serialize_region,
)
from pdf_annotation.tests.conftest import FakeExternalRegion, FakeResult


@pytest.fixture
def region(position):
    return Region(
        id="abc123",
        position=position,
        document_name="pdf",
        label="Person",
        text="Alice",
        result_id="result-abc123",
    )


def external_from_value(data):
    """Store region rebuilt from a persisted value, as after a reload."""
    value = data["value"]
    result = FakeResult(id="result-" + value["id"], area_id=value["id"], value=dict(value))
    return FakeExternalRegion(
        id=value["id"],
        position=value["position"],
        labels=[value["label"]] if "label" in value else [],
        results=[result],
    )


class TestSerializeRegion:
    def test_full_value(self, region, position):
        assert serialize_region(region, save_text=True) == {
            "value": {
                "position": position,
                "text": "Alice",
                "label": "Person",
                "id": "abc123",
            }
        }

    def test_text_only_when_saved(self, region):
        assert "text" not in serialize_region(region, save_text=False)["value"]

    def test_empty_text_is_left_out(self, position):
        region = Region(id="a", position=position, document_name="pdf", text="")
        assert "text" not in serialize_region(region, save_text=True)["value"]

    def test_optional_fields(self, position):
        region = Region(id="", position=position, document_name="pdf")
        assert serialize_region(region, save_text=True) == {"value": {"position": position}}

    def test_position_is_copied(self, region):
        value = serialize_region(region)
        value["value"]["position"]["pageNumber"] = 7
        assert region.position["pageNumber"] == 0

    def test_no_other_fields(self, region):
        assert set(serialize_region(region, save_text=True)["value"]) == {
            "position",
            "text",
            "label",
            "id",
        }


class TestRoundTrip:
    def test_serialize_then_derive(self, region):
        """Test that a persisted region rebuilds to the same region."""
        derived = derive_region(external_from_value(serialize_region(region, True)), "pdf")

        assert derived.position == region.position
        assert derived.label == region.label
        assert derived.text == region.text
        assert derived.id == region.id

    def test_serialize_then_deserialize(self, region):
        restored = deserialize_region(
            serialize_region(region, save_text=True), "pdf", result_id="result-abc123"
        )
        assert restored == region

    def test_deserialize_requires_position_and_id(self):
        with pytest.raises(ValueError, match="no position"):
            deserialize_region({"value": {"id": "a"}}, "pdf")
        with pytest.raises(ValueError, match="no id"):
            deserialize_region({"value": {"position": {}}}, "pdf")


class TestDeriveRegion:
    def test_text_from_first_result(self, position):
        external = FakeExternalRegion(
            id="a",
            position=position,
            labels=["Org", "Person"],
            results=[
                FakeResult(id="r1", area_id="a", value={"text": "ACME"}),
                FakeResult(id="r2", area_id="a", value={"text": "other"}),
            ],
        )

        region = derive_region(external, "pdf")

        assert region.text == "ACME"
        assert region.label == "Org"
        assert region.result_id == "r1"
        assert external.text == "ACME"

    def test_cached_text_wins(self, position):
        external = FakeExternalRegion(
            id="a",
            position=position,
            labels=["Person"],
            text="cached",
            results=[FakeResult(id="r1", area_id="a", value={"text": "stale"})],
        )
        assert derive_region(external, "pdf").text == "cached"

    def test_region_without_result_fails(self, position):
        external = FakeExternalRegion(id="a", position=position, labels=["Person"])
        with pytest.raises(ValueError, match="Region a has no result"):
            derive_region(external, "pdf")
