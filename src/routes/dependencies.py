from fastapi import Request
from models import (
    RunModel, CandidateModel, InterviewModel, StatsModel,
    FeedbackModel, PracticeInterviewModel, UsageLogModel,
)
from controllers import (
    StatsController, UsageController, FeedbackController, NotificationController,
)
from utils import Capabilities


def get_capabilities(request: Request) -> Capabilities:
    return getattr(request.app.state, "capabilities", None) or Capabilities()


def get_generation_client(request: Request):
    return getattr(request.app.state, "generation_client", None)


async def get_usage_controller(request: Request) -> UsageController:
    usage_model = await UsageLogModel.create_instance(request.app.state.db_client)
    return UsageController(usage_model, capabilities=get_capabilities(request))


async def get_stats_controller(request: Request) -> StatsController:
    db_client = request.app.state.db_client
    return StatsController(
        run_model=await RunModel.create_instance(db_client),
        candidate_model=await CandidateModel.create_instance(db_client),
        interview_model=await InterviewModel.create_instance(db_client),
        stats_model=await StatsModel.create_instance(db_client),
        capabilities=get_capabilities(request),
    )


async def get_feedback_controller(request: Request) -> FeedbackController:
    return FeedbackController(
        feedback_model=await FeedbackModel.create_instance(request.app.state.db_client),
        usage_controller=await get_usage_controller(request),
        capabilities=get_capabilities(request),
    )


def get_notification_controller(request: Request) -> NotificationController:
    return NotificationController(capabilities=get_capabilities(request))


async def get_practice_interview_model(request: Request) -> PracticeInterviewModel:
    return await PracticeInterviewModel.create_instance(request.app.state.db_client)
