from fastapi import APIRouter, Depends, HTTPException, status
from controllers import UsageController
from .dependencies import get_usage_controller

analytics_router = APIRouter(
    prefix="/api/v1/analytics",
    tags=["api_v1", "analytics", "metrics"]
)


@analytics_router.get("/usage/{run_id}")
async def get_run_usage(run_id: str, usage_controller: UsageController = Depends(get_usage_controller)):
    """Token usage and latency of every model call made for a run."""
    try:
        return await usage_controller.get_run_summary(run_id)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )
