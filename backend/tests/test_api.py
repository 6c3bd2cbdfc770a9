"""HTTP tests for the FastAPI app.

Every external dependency is overridden: an in-memory database shared across
threads and the fake completion client.
"""

import json

import pytest
from conftest import FakeCompletionClient
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from listing_studio.config import settings
from listing_studio.database import Base, get_db, get_session_factory
from listing_studio.llm import factory
from listing_studio.main import app
from listing_studio.models import GenerationAnalytics, Property
from listing_studio.routers.dependencies import get_agent_info, get_client
from listing_studio.schemas.generation import AgentInfo
from listing_studio.utils.exceptions import StreamedApiError

PREFIX = settings.api_prefix

STYLE_JSON = json.dumps(
    {
        "tone": "Warm and upbeat",
        "vocabulary": ["sun-drenched"],
        "sentence_patterns": "Short sentences",
        "themes": ["light"],
        "signature_phrases": ["Come see for yourself"],
    }
)

PROPERTY_BODY = {
    "address": "123 Oak Street",
    "city": "San Francisco",
    "state": "CA",
    "zip": "94105",
    "beds": 3,
    "baths": 2.5,
    "sqft": 1800,
    "price": 95_000_000,
    "property_type": "single_family",
    "key_features": ["hardwood floors", "chef's kitchen"],
    "neighborhood": "Mission Bay",
}


def parse_sse(body: str) -> list[dict]:
    frames = []
    for block in body.split("\n\n"):
        if not block.strip():
            continue
        lines = dict(line.split(": ", 1) for line in block.split("\n"))
        frames.append({"event": lines["event"], "payload": json.loads(lines["data"])})
    return frames


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture
def api(fake_client):
    import listing_studio.models  # noqa: F401

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: TestSession
    app.dependency_overrides[get_client] = lambda: fake_client
    app.dependency_overrides[get_agent_info] = lambda: AgentInfo(
        name="Jane Smith", phone="555-1234", email="jane@example.com", brokerage="RE/MAX"
    )
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        engine.dispose()


@pytest.fixture
def property_id(api) -> int:
    response = api.post(f"{PREFIX}/properties", json=PROPERTY_BODY)
    assert response.status_code == 201
    return response.json()["id"]


def test_health(api):
    response = api.get(f"{PREFIX}/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestProperties:
    def test_create_and_get(self, api, property_id):
        response = api.get(f"{PREFIX}/properties/{property_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["address"] == "123 Oak Street"
        assert data["key_features"] == ["hardwood floors", "chef's kitchen"]
        assert data["nearby_amenities"] == []

    def test_validation(self, api):
        response = api.post(f"{PREFIX}/properties", json={**PROPERTY_BODY, "beds": -1})
        assert response.status_code == 422

    def test_not_found(self, api):
        assert api.get(f"{PREFIX}/properties/424242").status_code == 404
        assert api.delete(f"{PREFIX}/properties/424242").status_code == 404

    def test_delete(self, api, property_id):
        assert api.delete(f"{PREFIX}/properties/{property_id}").status_code == 204
        assert api.get(f"{PREFIX}/properties/{property_id}").status_code == 404


class TestGenerate:
    def test_listing_streams_and_saves(self, api, property_id, fake_client):
        response = api.post(
            f"{PREFIX}/generate/listing",
            json={
                "property_id": property_id,
                "style": "luxury",
                "tone": "warm",
                "length": "short",
                "seo_keywords": ["Mission Bay"],
            },
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        frames = parse_sse(response.text)
        assert [f["event"] for f in frames] == ["started", "delta", "delta", "delta", "finished"]
        assert frames[0]["payload"] == {"event": "started", "data": {"estimatedTokens": 400}}
        assert frames[-1]["payload"]["data"] == {
            "fullText": "Sunlit three-bedroom home.",
            "inputTokens": 520,
            "outputTokens": 330,
            "costCents": 0,
        }
        assert fake_client.stream_calls[0][2] == 1024

        contents = api.get(f"{PREFIX}/properties/{property_id}/contents").json()
        assert len(contents) == 1
        assert contents[0]["content"] == "Sunlit three-bedroom home."
        assert contents[0]["generation_type"] == "listing"
        assert contents[0]["style"] == "luxury"
        assert contents[0]["seo_keywords"] == ["Mission Bay"]
        assert contents[0]["tokens_used"] == 850

    def test_social_and_email_types(self, api, property_id):
        api.post(
            f"{PREFIX}/generate/social",
            json={"property_id": property_id, "platform": "instagram"},
        )
        api.post(
            f"{PREFIX}/generate/email",
            json={"property_id": property_id, "template_type": "open_house"},
        )

        contents = api.get(f"{PREFIX}/properties/{property_id}/contents").json()
        assert {c["generation_type"] for c in contents} == {"social_instagram", "email_open_house"}

    def test_malformed_stored_lists_still_stream(self, api, property_id):
        session_factory = app.dependency_overrides[get_session_factory]()
        with session_factory() as db:
            db.get(Property, property_id).nearby_amenities = "[1, 2]"
            db.commit()

        response = api.post(
            f"{PREFIX}/generate/listing",
            json={"property_id": property_id, "style": "luxury", "tone": "warm"},
        )

        assert response.status_code == 200
        assert parse_sse(response.text)[-1]["event"] == "finished"

    def test_unknown_property(self, api):
        response = api.post(
            f"{PREFIX}/generate/listing",
            json={"property_id": 424242, "style": "luxury", "tone": "warm"},
        )
        assert response.status_code == 404

    def test_unknown_brand_voice(self, api, property_id):
        response = api.post(
            f"{PREFIX}/generate/social",
            json={"property_id": property_id, "platform": "facebook", "brand_voice_id": 424242},
        )
        assert response.status_code == 404

    def test_stream_failure_ends_with_error_and_saves_nothing(self, api, property_id, fake_client):
        fake_client.stream_error = StreamedApiError("Overloaded")

        response = api.post(
            f"{PREFIX}/generate/email",
            json={"property_id": property_id, "template_type": "buyer"},
        )

        frames = parse_sse(response.text)
        assert frames[-1]["event"] == "error"
        assert frames[-1]["payload"]["data"] == {"message": "Overloaded"}
        assert "finished" not in [f["event"] for f in frames]
        assert api.get(f"{PREFIX}/properties/{property_id}/contents").json() == []

    def test_bad_analysis_ends_with_error(self, api, property_id, fake_client):
        fake_client.analysis_text = "no json here"

        response = api.post(
            f"{PREFIX}/generate/listing",
            json={"property_id": property_id, "style": "family", "tone": "warm"},
        )

        frames = parse_sse(response.text)
        assert [f["event"] for f in frames] == ["error"]
        assert "Failed to parse property analysis" in frames[0]["payload"]["data"]["message"]
        assert fake_client.stream_calls == []

    def test_missing_api_key(self, api, property_id, monkeypatch):
        del app.dependency_overrides[get_client]
        monkeypatch.setattr(settings, "anthropic_api_key", "")
        monkeypatch.setattr(factory, "_client_instance", None)

        response = api.post(
            f"{PREFIX}/generate/listing",
            json={"property_id": property_id, "style": "luxury", "tone": "warm"},
        )

        assert response.status_code == 400
        assert "ANTHROPIC_API_KEY" in response.json()["detail"]


class TestContents:
    def _generate(self, api, property_id) -> int:
        api.post(
            f"{PREFIX}/generate/social",
            json={"property_id": property_id, "platform": "linkedin"},
        )
        return api.get(f"{PREFIX}/properties/{property_id}/contents").json()[0]["id"]

    def test_favorite_toggle(self, api, property_id):
        content_id = self._generate(api, property_id)
        assert api.post(f"{PREFIX}/contents/{content_id}/favorite").json()["is_favorite"] is True
        assert api.post(f"{PREFIX}/contents/{content_id}/favorite").json()["is_favorite"] is False

    def test_delete(self, api, property_id):
        content_id = self._generate(api, property_id)
        assert api.delete(f"{PREFIX}/contents/{content_id}").status_code == 204
        assert api.delete(f"{PREFIX}/contents/{content_id}").status_code == 404


class TestBrandVoices:
    SAMPLES = ["Sun-drenched two bedroom.", "Thoughtfully updated craftsman."]

    def test_create_and_use(self, api, fake_client):
        fake_client.analysis_text = STYLE_JSON
        response = api.post(
            f"{PREFIX}/brand-voices",
            json={"name": "Jane", "sample_listings": self.SAMPLES},
        )
        assert response.status_code == 201
        voice = response.json()
        assert voice["sample_count"] == 2
        assert voice["extracted_style"]["tone"] == "Warm and upbeat"

        assert api.get(f"{PREFIX}/brand-voices/{voice['id']}").status_code == 200
        assert [v["id"] for v in api.get(f"{PREFIX}/brand-voices").json()] == [voice["id"]]

    def test_too_few_samples(self, api, fake_client):
        response = api.post(
            f"{PREFIX}/brand-voices",
            json={"name": "Jane", "sample_listings": ["only one"]},
        )
        assert response.status_code == 400
        assert "At least 2 sample listings" in response.json()["detail"]
        assert fake_client.complete_calls == []

    def test_unparseable_extraction(self, api, fake_client):
        fake_client.analysis_text = "I could not find a pattern."
        response = api.post(
            f"{PREFIX}/brand-voices",
            json={"name": "Jane", "sample_listings": self.SAMPLES},
        )
        assert response.status_code == 502

    def test_not_found(self, api):
        assert api.get(f"{PREFIX}/brand-voices/424242").status_code == 404
        assert api.delete(f"{PREFIX}/brand-voices/424242").status_code == 404


class TestAnalytics:
    def test_summary_counts_successes_and_failures(self, api, property_id, fake_client):
        api.post(
            f"{PREFIX}/generate/listing",
            json={"property_id": property_id, "style": "luxury", "tone": "warm"},
        )
        fake_client.stream_error = StreamedApiError("Overloaded")
        api.post(
            f"{PREFIX}/generate/email",
            json={"property_id": property_id, "template_type": "buyer"},
        )

        response = api.get(f"{PREFIX}/analytics/summary")

        assert response.status_code == 200
        summary = response.json()
        assert summary["total_generations"] == 2
        assert summary["total_cost_cents"] == 0
        assert summary["success_rate"] == 50.0

        session_factory = app.dependency_overrides[get_session_factory]()
        with session_factory() as db:
            rows = db.query(GenerationAnalytics).order_by(GenerationAnalytics.id).all()
        assert [r.generation_type for r in rows] == ["listing", "email_buyer"]
        assert {r.model_used for r in rows} == {"fake-model"}
        assert (rows[0].input_tokens, rows[0].output_tokens) == (520, 330)
        assert rows[1].success is False
        assert rows[1].input_tokens == 0
        assert rows[1].error_message == "Overloaded"

    def test_empty_summary(self, api):
        assert api.get(f"{PREFIX}/analytics/summary").json() == {
            "total_generations": 0,
            "total_cost_cents": 0,
            "average_latency_ms": 0.0,
            "success_rate": 100.0,
        }


class TestExports:
    @pytest.fixture
    def generated(self, api, property_id) -> int:
        api.post(
            f"{PREFIX}/generate/listing",
            json={"property_id": property_id, "style": "luxury", "tone": "warm"},
        )
        return property_id

    def test_pdf(self, api, generated):
        response = api.post(f"{PREFIX}/exports/pdf", json={"property_id": generated})

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")
        assert (
            response.headers["content-disposition"]
            == f'attachment; filename="property_{generated}_professional.pdf"'
        )

    def test_docx(self, api, generated):
        content_id = api.get(f"{PREFIX}/properties/{generated}/contents").json()[0]["id"]

        response = api.post(
            f"{PREFIX}/exports/docx",
            json={"property_id": generated, "content_ids": [content_id], "template": "Luxury"},
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
        )
        assert response.content[:2] == b"PK"

    def test_unknown_template(self, api, property_id):
        response = api.post(
            f"{PREFIX}/exports/pdf", json={"property_id": property_id, "template": "gothic"}
        )
        assert response.status_code == 400

    def test_unknown_property(self, api):
        assert api.post(f"{PREFIX}/exports/docx", json={"property_id": 424242}).status_code == 404

    def test_unknown_content(self, api, property_id):
        response = api.post(
            f"{PREFIX}/exports/pdf", json={"property_id": property_id, "content_ids": [424242]}
        )
        assert response.status_code == 404
