from .BaseDataModel import BaseDataModel
from .RunModel import RunModel
from .CandidateModel import CandidateModel
from .InterviewModel import InterviewModel
from .FeedbackModel import FeedbackModel
from .PracticeInterviewModel import PracticeInterviewModel
from .StatsModel import StatsModel
from .UsageLogModel import UsageLogModel
