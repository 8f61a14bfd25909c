from enum import Enum


class RunStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class InterviewStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


# Allowed interview status changes; failed and completed are terminal
INTERVIEW_TRANSITIONS = {
    InterviewStatus.SCHEDULED: {InterviewStatus.IN_PROGRESS},
    InterviewStatus.IN_PROGRESS: {InterviewStatus.COMPLETED, InterviewStatus.FAILED},
    InterviewStatus.COMPLETED: set(),
    InterviewStatus.FAILED: set(),
}


def can_transition(current: InterviewStatus, target: InterviewStatus) -> bool:
    return InterviewStatus(target) in INTERVIEW_TRANSITIONS[InterviewStatus(current)]
