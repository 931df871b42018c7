# app/routers/submit.py

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from app.core.exceptions import OnboardingError
from app.core.logging_config import clear_submission, logger
from app.core.settings import Settings
from app.schemas.onboarding import ErrorResponse, SubmitResponse
from app.services.onboarding_service import SUCCESS_MESSAGE, process_submission
from app.services.storage import Storage, get_storage

router = APIRouter(tags=["onboarding"])


def app_settings(request: Request) -> Settings:
    """Settings waarmee create_app de app gebouwd heeft."""
    return request.app.state.settings


@router.post(
    "/submit",
    response_model=SubmitResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def submit(
    body: Any = Body(default=None),
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(app_settings),
):
    # sync endpoint: boto3 blokkeert, FastAPI draait dit in de threadpool
    try:
        result = process_submission(body, storage, settings)
    except OnboardingError as e:
        if e.status_code >= 500:
            logger.error("submission_failed", error=e.message, error_type=type(e).__name__)
        else:
            logger.warning("submission_rejected", error=e.message, error_type=type(e).__name__)
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
    except Exception as e:
        logger.exception("submission_crashed")
        return JSONResponse(status_code=500, content={"error": str(e)})
    finally:
        clear_submission()

    return SubmitResponse(
        message=SUCCESS_MESSAGE,
        folder=result.folder,
        files=result.uploaded_keys,
    )
