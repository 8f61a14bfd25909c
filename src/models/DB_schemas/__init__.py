from .types import PyObjectId, new_object_id
from .enums import RunStatus, InterviewStatus, can_transition
from .candidate import Candidate, CandidateAnalysis, ScoringBreakdown, DetailedFeedback
from .run import Run, ShortlistEntry
from .interview import Interview, InterviewReport, TranscriptTurn
from .feedback import Feedback, FeedbackAssessment, CategoryScore
from .practice_interview import PracticeInterview
from .stats import RecruitmentStats
from .usage_log import UsageLog
