import pytest
from models import InterviewModel
from models.DB_schemas.enums import InterviewStatus, can_transition
from models.DB_schemas.interview import Interview
from utils.exceptions import InvalidTransition


def test_allowed_transitions():
    assert can_transition(InterviewStatus.SCHEDULED, InterviewStatus.IN_PROGRESS)
    assert can_transition("in_progress", "completed")
    assert can_transition("in_progress", "failed")


def test_rejected_transitions():
    assert not can_transition(InterviewStatus.SCHEDULED, InterviewStatus.COMPLETED)
    assert not can_transition(InterviewStatus.SCHEDULED, InterviewStatus.FAILED)
    assert not can_transition(InterviewStatus.COMPLETED, InterviewStatus.IN_PROGRESS)
    assert not can_transition(InterviewStatus.FAILED, InterviewStatus.IN_PROGRESS)


async def _scheduled_interview(fake_db):
    model = await InterviewModel.create_instance(fake_db)
    interview = Interview(
        candidate_id="cand-1",
        candidate_email="ada@example.com",
        run_id="run-1",
        scheduled_at="2030-01-01T10:00:00Z",
    )
    await model.create_interview(interview)
    return model, interview


async def test_transition_writes_status_and_fields(fake_db):
    model, interview = await _scheduled_interview(fake_db)
    await model.transition(interview.id, "scheduled", "in_progress")
    await model.transition(interview.id, "in_progress", "failed", error="line dropped")

    stored = await model.get_interview_by_id(interview.id)
    assert stored.status == "failed"
    assert stored.error == "line dropped"


async def test_scheduled_to_completed_raises(fake_db):
    model, interview = await _scheduled_interview(fake_db)
    with pytest.raises(InvalidTransition) as exc_info:
        await model.transition(interview.id, "scheduled", "completed")
    assert exc_info.value.current == "scheduled"
    assert exc_info.value.target == "completed"
    assert (await model.get_interview_by_id(interview.id)).status == "scheduled"


async def test_transition_requires_expected_current_status(fake_db):
    model, interview = await _scheduled_interview(fake_db)
    await model.transition(interview.id, "scheduled", "in_progress")
    with pytest.raises(InvalidTransition):
        await model.transition(interview.id, "scheduled", "in_progress")
