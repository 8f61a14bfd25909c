from .BaseController import BaseController
from .ResumeProcessor import ResumeProcessor
from .ScreeningController import ScreeningController
from .ShortlistPolicy import ShortlistPolicy
from .NotificationController import NotificationController, DeliveryStatus
from .UsageController import UsageController
from .StatsController import StatsController
from .FeedbackController import FeedbackController
from .RunController import RunController
from .WebhookController import WebhookController
from .InterviewRunner import InterviewRunner
