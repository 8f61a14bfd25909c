from .base import base_router
from .resume import resume_router
from .webhook import webhook_router
from .interview import interview_router
from .recruit import recruit_router
from .feedback import feedback_router
from .analytics import analytics_router
