import json
from datetime import datetime, timedelta, timezone
import pytest
from controllers import WebhookController
from models import CandidateModel
from utils import Capabilities
from utils.security import compute_signature
from conftest import build_candidate


@pytest.fixture
def runner_calls(monkeypatch):
    calls = []

    async def fake_trigger(self, interview_id):
        calls.append(interview_id)

    monkeypatch.setattr(WebhookController, "trigger_runner", fake_trigger)
    return calls


def _event(email="ada@example.com", start_time=None, event="invitee.created") -> dict:
    if start_time is None:
        start_time = (datetime.now(timezone.utc) + timedelta(hours=24)).isoformat()
    return {
        "event": event,
        "payload": {
            "invitee": {"email": email, "scheduled_event": {"start_time": start_time}},
            "event_type": {"uri": "https://api.calendly.com/event_types/abc"},
        },
    }


async def _post(client, event: dict, secret: str = None, signature: str = None):
    body = json.dumps(event).encode("utf-8")
    headers = {"Content-Type": "application/json"}
    if secret:
        headers["Calendly-Webhook-Signature"] = compute_signature(body, secret)
    if signature:
        headers["Calendly-Webhook-Signature"] = signature
    return await client.post("/api/v1/calendly/webhook", content=body, headers=headers)


async def test_missing_signature_is_401_when_secret_configured(client, runner_calls):
    response = await _post(client, _event())
    assert response.status_code == 401


async def test_wrong_signature_is_401(client, runner_calls):
    response = await _post(client, _event(), secret="not-the-secret")
    assert response.status_code == 401


async def test_unsigned_event_accepted_without_secret(app, client, runner_calls):
    app.state.capabilities = Capabilities(store=True, generation=True, webhook_verification=False)
    response = await _post(client, _event(event="invitee.canceled"))
    assert response.status_code == 200
    assert response.json()["message"] == "Event processed"


async def test_missing_fields_is_400(client, settings, runner_calls):
    response = await _post(client, _event(email=None), secret=settings.CALENDLY_WEBHOOK_SECRET)
    assert response.status_code == 400


async def test_unknown_candidate_is_200_not_found(client, settings, runner_calls):
    response = await _post(client, _event(email="nobody@example.com"), secret=settings.CALENDLY_WEBHOOK_SECRET)
    assert response.status_code == 200
    assert response.json()["message"] == "Candidate not found"
    assert runner_calls == []


async def test_booking_creates_interview_and_triggers_runner(client, fake_db, settings, runner_calls):
    candidate = await CandidateModel(fake_db).create_candidate(build_candidate())

    response = await _post(client, _event(email="Ada@Example.com"), secret=settings.CALENDLY_WEBHOOK_SECRET)
    assert response.status_code == 200
    interview_id = response.json()["interview_id"]

    stored = fake_db[settings.INTERVIEWS_COLLECTION].documents
    assert len(stored) == 1
    assert stored[0]["_id"] == interview_id
    assert stored[0]["status"] == "scheduled"
    assert stored[0]["candidate_id"] == candidate.id
    assert stored[0]["run_id"] == candidate.run_id
    assert stored[0]["calendly_event_uri"] == "https://api.calendly.com/event_types/abc"

    assert fake_db[settings.STATS_COLLECTION].documents[0]["interviews_scheduled"] == 1
    assert runner_calls == [interview_id]


async def test_far_future_booking_is_left_scheduled(client, fake_db, settings, runner_calls):
    await CandidateModel(fake_db).create_candidate(build_candidate())
    start = (datetime.now(timezone.utc) + timedelta(days=10)).isoformat()

    response = await _post(client, _event(start_time=start), secret=settings.CALENDLY_WEBHOOK_SECRET)
    assert response.status_code == 200
    assert runner_calls == []
    assert fake_db[settings.INTERVIEWS_COLLECTION].documents[0]["status"] == "scheduled"


async def test_timestamped_signature_header_is_accepted(client, fake_db, settings, runner_calls):
    event = _event(event="invitee.canceled")
    body = json.dumps(event).encode("utf-8")
    digest = compute_signature(b"1700000000." + body, settings.CALENDLY_WEBHOOK_SECRET)
    response = await _post(client, event, signature=f"t=1700000000,v1={digest}")
    assert response.status_code == 200


@pytest.mark.parametrize("payload", [
    {"invitee": "ada@example.com"},
    {"invitee": {"email": "ada@example.com", "scheduled_event": "tomorrow"}},
    {"invitee": {"email": 42, "scheduled_event": {"start_time": "2030-01-01T10:00:00Z"}}},
    {"event_type": ["not", "an", "object"]},
])
async def test_malformed_payload_is_400(client, fake_db, settings, runner_calls, payload):
    await CandidateModel(fake_db).create_candidate(build_candidate())

    response = await _post(client, {"event": "invitee.created", "payload": payload},
                           secret=settings.CALENDLY_WEBHOOK_SECRET)
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert fake_db[settings.INTERVIEWS_COLLECTION].documents == []
    assert runner_calls == []


async def test_non_json_body_is_400(client, settings, runner_calls):
    body = b"not json"
    response = await client.post(
        "/api/v1/calendly/webhook", content=body,
        headers={"Calendly-Webhook-Signature": compute_signature(body, settings.CALENDLY_WEBHOOK_SECRET)},
    )
    assert response.status_code == 400


async def test_flattened_payload_layout_is_accepted(client, fake_db, settings, runner_calls):
    await CandidateModel(fake_db).create_candidate(build_candidate())
    start = (datetime.now(timezone.utc) + timedelta(hours=2)).isoformat()
    event = {
        "event": "invitee.created",
        "payload": {"email": "ada@example.com", "scheduled_event": {"start_time": start, "uri": "evt-1"}},
    }

    response = await _post(client, event, secret=settings.CALENDLY_WEBHOOK_SECRET)
    assert response.status_code == 200
    stored = fake_db[settings.INTERVIEWS_COLLECTION].documents[0]
    assert stored["candidate_email"] == "ada@example.com"
    assert stored["calendly_event_uri"] == "evt-1"


async def test_bad_signature_touches_no_collection(client, fake_db, runner_calls):
    response = await _post(client, _event(), secret="not-the-secret")
    assert response.status_code == 401
    assert fake_db.collections == {}
