import logging
from fastapi import APIRouter, Form, HTTPException, Request, UploadFile, File, status
from fastapi.responses import JSONResponse
from controllers import RunController, ResumeProcessor, ScreeningController
from models import RunModel, CandidateModel
from .dependencies import (
    get_capabilities, get_generation_client, get_usage_controller, get_notification_controller,
)

logger = logging.getLogger("uvicorn.error")

resume_router = APIRouter(
    prefix="/api/v1/resume",
    tags=["api_v1", "resume"]
)


@resume_router.post("/process")
async def process_resumes(
    request: Request,
    job_description: str = Form(default=""),
    files: list[UploadFile] = File(default=[]),
):
    """Screen a batch of resumes against one job description and record the run."""
    capabilities = get_capabilities(request)
    resume_processor = ResumeProcessor(capabilities)

    is_valid, message = await resume_processor.validate_uploads(job_description, files)
    if not is_valid:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": message}
        )

    generation_client = get_generation_client(request)
    if generation_client is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"success": False, "error": "No generation backend is configured"}
        )

    db_client = request.app.state.db_client
    run_controller = RunController(
        run_model=await RunModel.create_instance(db_client),
        candidate_model=await CandidateModel.create_instance(db_client),
        resume_processor=resume_processor,
        screening_controller=ScreeningController(capabilities),
        notification_controller=get_notification_controller(request),
        usage_controller=await get_usage_controller(request),
        capabilities=capabilities,
    )

    try:
        run, candidates = await run_controller.process(generation_client, job_description, files)
    except Exception as e:
        logger.error(f"Resume processing failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to process resumes: {str(e)}"
        )

    return {
        "success": True,
        "run_id": run.id,
        "total": run.total,
        "total_processed": run.processed,
        "failed": run.failed,
        "shortlisted": len(run.shortlisted),
        "run": run.model_dump(),
        "candidates": [run_controller.summarize(candidate) for candidate in candidates],
    }
