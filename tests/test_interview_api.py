import asyncio
import pytest
from controllers import (
    FeedbackController, InterviewRunner, NotificationController, StatsController,
)
from controllers.NotificationController import NEXT_STEP_MESSAGES
from models import CandidateModel, FeedbackModel, InterviewModel, RunModel, StatsModel
from models.DB_schemas.interview import Interview
from models.DB_schemas.run import Run
from stores.voice.VoiceSessionEnums import SessionState
from utils import Capabilities
from conftest import FakeVoiceFactory, build_candidate, message_html

AUTH = {"Authorization": "Bearer test-internal-key"}


@pytest.fixture
async def scheduled(fake_db):
    run = await RunModel(fake_db).create_run(Run(job_description="Senior Python engineer"))
    candidate = await CandidateModel(fake_db).create_candidate(build_candidate(run_id=run.id))
    interview = await InterviewModel(fake_db).create_interview(Interview(
        candidate_id=candidate.id,
        candidate_email=candidate.email,
        run_id=run.id,
        scheduled_at="2030-01-01T10:00:00Z",
    ))
    return run, candidate, interview


async def _stored(fake_db, interview_id):
    return await InterviewModel(fake_db).get_interview_by_id(interview_id)


async def test_bad_bearer_is_401(client, scheduled):
    _, _, interview = scheduled
    response = await client.post(
        "/api/v1/interview/run", json={"interview_id": interview.id},
        headers={"Authorization": "Bearer wrong"},
    )
    assert response.status_code == 401


async def test_missing_interview_id_is_400(client):
    response = await client.post("/api/v1/interview/run", json={}, headers=AUTH)
    assert response.status_code == 400


async def test_unknown_interview_is_404(client):
    response = await client.post("/api/v1/interview/run", json={"interview_id": "nope"}, headers=AUTH)
    assert response.status_code == 404


async def test_completed_interview(client, fake_db, fake_llm, voice_factory, settings, scheduled):
    _, candidate, interview = scheduled

    response = await client.post("/api/v1/interview/run", json={"interviewId": interview.id}, headers=AUTH)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["report"]["recommended_next_step"] == "onsite"

    stored = await _stored(fake_db, interview.id)
    assert stored.status == "completed"
    assert [turn.role for turn in stored.transcript] == ["assistant", "user"]
    assert stored.report.overall_score == 78
    assert stored.voice_session_id == "fake-call-1"
    assert stored.recording_url.endswith(".mp3")
    assert stored.feedback_id == body["feedback_id"]

    feedback = fake_db[settings.FEEDBACK_COLLECTION].documents
    assert len(feedback) == 1
    assert feedback[0]["interview_id"] == interview.id
    assert feedback[0]["user_id"] == candidate.id
    assert [c["name"] for c in feedback[0]["category_scores"]] == [
        "Communication Skills", "Technical Knowledge", "Problem-Solving",
        "Cultural & Role Fit", "Confidence & Clarity",
    ]

    session = voice_factory.sessions[0]
    assert session.customer.number == candidate.ai.phone
    assert session.handler_count() == 0

    report_prompt = next(prompt for name, prompt in fake_llm.calls if name == "InterviewReport")
    assert "Senior Python engineer" in report_prompt
    assert "user: I build Python services." in report_prompt


async def test_mid_call_error_marks_interview_failed(app, client, fake_db, scheduled):
    _, _, interview = scheduled
    app.state.voice_session_factory = FakeVoiceFactory(fail_mid_call=True)

    response = await client.post("/api/v1/interview/run", json={"interview_id": interview.id}, headers=AUTH)
    assert response.status_code == 500
    assert response.json()["success"] is False

    stored = await _stored(fake_db, interview.id)
    assert stored.status == "failed"
    assert "line dropped" in stored.error
    assert app.state.voice_session_factory.sessions[0].handler_count() == 0


async def test_start_failure_marks_interview_failed(app, client, fake_db, scheduled):
    _, _, interview = scheduled
    app.state.voice_session_factory = FakeVoiceFactory(fail_start=True)

    response = await client.post("/api/v1/interview/run", json={"interview_id": interview.id}, headers=AUTH)
    assert response.status_code == 500
    assert (await _stored(fake_db, interview.id)).status == "failed"


async def test_report_failure_marks_interview_failed(client, fake_db, fake_llm, scheduled):
    _, _, interview = scheduled
    fake_llm.fail_on.add("InterviewReport")

    response = await client.post("/api/v1/interview/run", json={"interview_id": interview.id}, headers=AUTH)
    assert response.status_code == 500
    stored = await _stored(fake_db, interview.id)
    assert stored.status == "failed"
    assert stored.report is None


async def test_interview_cannot_run_twice(client, fake_db, scheduled):
    _, _, interview = scheduled
    first = await client.post("/api/v1/interview/run", json={"interview_id": interview.id}, headers=AUTH)
    assert first.status_code == 200

    second = await client.post("/api/v1/interview/run", json={"interview_id": interview.id}, headers=AUTH)
    assert second.status_code == 409
    assert (await _stored(fake_db, interview.id)).status == "completed"


async def test_malformed_body_without_bearer_is_401(client):
    response = await client.post(
        "/api/v1/interview/run", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 401


async def test_malformed_body_with_bearer_is_400(client):
    response = await client.post(
        "/api/v1/interview/run", content=b"{not json",
        headers={**AUTH, "Content-Type": "application/json"},
    )
    assert response.status_code == 400


async def test_completed_interview_sends_report_and_follow_up(app, client, smtp_outbox, scheduled):
    _, candidate, interview = scheduled
    app.state.capabilities = Capabilities(store=True, generation=True, voice=True, email=True)

    response = await client.post("/api/v1/interview/run", json={"interview_id": interview.id}, headers=AUTH)
    assert response.status_code == 200

    admin, follow_up = smtp_outbox
    assert admin["To"] == "hr@example.com"
    assert candidate.ai.candidate_name in admin["Subject"]
    assert follow_up["To"] == candidate.email
    assert NEXT_STEP_MESSAGES["onsite"] in message_html(follow_up)


async def test_cancelled_run_stops_session_and_fails_interview(fake_db, fake_llm, scheduled):
    _, _, interview = scheduled
    factory = FakeVoiceFactory(hang=True)
    runner = InterviewRunner(
        run_model=RunModel(fake_db),
        candidate_model=CandidateModel(fake_db),
        interview_model=InterviewModel(fake_db),
        feedback_controller=FeedbackController(FeedbackModel(fake_db)),
        notification_controller=NotificationController(),
        stats_controller=StatsController(
            RunModel(fake_db), CandidateModel(fake_db), InterviewModel(fake_db), StatsModel(fake_db)
        ),
        voice_factory=factory,
    )

    task = asyncio.create_task(runner.run(fake_llm, interview.id))
    for _ in range(50):
        if factory.sessions and factory.sessions[0].state == SessionState.ACTIVE:
            break
        await asyncio.sleep(0)
    session = factory.sessions[0]
    assert session.state == SessionState.ACTIVE
    assert session.handler_count() == 3

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    await session.wait()

    assert session.handler_count() == 0
    assert session.state == SessionState.ENDED
    assert session._task.done()

    stored = await _stored(fake_db, interview.id)
    assert stored.status == "failed"
    assert stored.error == "Interview run was cancelled"
