"""Tests for property and generated-content persistence."""

import json

import pytest

from listing_studio.schemas.generation import GenerationResult
from listing_studio.schemas.property import PropertyCreate, PropertySnapshot
from listing_studio.services import content_service, property_service
from listing_studio.utils.exceptions import ContentNotFoundError, PropertyNotFoundError


@pytest.fixture
def property_data(snapshot) -> PropertyCreate:
    return PropertyCreate(**snapshot.model_dump())


@pytest.fixture
def result() -> GenerationResult:
    return GenerationResult(
        full_text="Sunlit three-bedroom home.",
        input_tokens=520,
        output_tokens=330,
        cost_cents=0,
        analysis_json='{"selling_points": []}',
    )


class TestPropertyService:
    def test_create_encodes_lists(self, db, property_data):
        prop = property_service.create_property(db, property_data)
        assert prop.id is not None
        assert json.loads(prop.key_features) == ["hardwood floors", "chef's kitchen", "pool"]
        assert prop.created_at is not None

    def test_snapshot_round_trip(self, db, property_data, snapshot):
        prop = property_service.create_property(db, property_data)
        loaded = property_service.get_snapshot(db, prop.id)
        assert isinstance(loaded, PropertySnapshot)
        assert loaded == snapshot

    def test_snapshot_tolerates_bad_list_column(self, db, property_data):
        prop = property_service.create_property(db, property_data)
        prop.nearby_amenities = "not json"
        db.commit()
        assert property_service.get_snapshot(db, prop.id).nearby_amenities == []

    def test_snapshot_coerces_non_string_list_items(self, db, property_data):
        prop = property_service.create_property(db, property_data)
        prop.key_features = '[1, 2.5, "pool", null, {"a": 1}, true]'
        db.commit()
        assert property_service.get_snapshot(db, prop.id).key_features == ["1", "2.5", "pool"]

    def test_missing_property(self, db):
        with pytest.raises(PropertyNotFoundError, match="Property 999999 not found"):
            property_service.get_property(db, 999_999)

    def test_list_and_delete(self, db, property_data):
        prop = property_service.create_property(db, property_data)
        assert prop.id in [p.id for p in property_service.list_properties(db, limit=500)]
        property_service.delete_property(db, prop.id)
        with pytest.raises(PropertyNotFoundError):
            property_service.get_property(db, prop.id)


class TestContentService:
    def test_save_result(self, db, property_data, result):
        prop = property_service.create_property(db, property_data)

        content = content_service.save_result(
            db,
            prop.id,
            result,
            "listing",
            style="luxury",
            tone="warm",
            length="short",
            seo_keywords=["Mission Bay"],
        )

        assert content.content == "Sunlit three-bedroom home."
        assert content.generation_type == "listing"
        assert content.tokens_used == 850
        assert content.generation_cost_cents == 0
        assert content.seo_keywords == '["Mission Bay"]'
        assert content.analysis_json == '{"selling_points": []}'
        assert content.is_favorite is False

    def test_list_by_property(self, db, property_data, result):
        prop = property_service.create_property(db, property_data)
        first = content_service.save_result(db, prop.id, result, "social_instagram")
        second = content_service.save_result(db, prop.id, result, "email_buyer")

        ids = [c.id for c in content_service.list_by_property(db, prop.id)]

        assert set(ids) == {first.id, second.id}

    def test_toggle_favorite(self, db, property_data, result):
        prop = property_service.create_property(db, property_data)
        content = content_service.save_result(db, prop.id, result, "listing")
        assert content_service.toggle_favorite(db, content.id).is_favorite is True
        assert content_service.toggle_favorite(db, content.id).is_favorite is False

    def test_delete(self, db, property_data, result):
        prop = property_service.create_property(db, property_data)
        content = content_service.save_result(db, prop.id, result, "listing")
        content_service.delete_content(db, content.id)
        with pytest.raises(ContentNotFoundError):
            content_service.get_content(db, content.id)

    def test_deleting_property_removes_contents(self, db, property_data, result):
        prop = property_service.create_property(db, property_data)
        content = content_service.save_result(db, prop.id, result, "listing")
        property_service.delete_property(db, prop.id)
        with pytest.raises(ContentNotFoundError):
            content_service.get_content(db, content.id)
