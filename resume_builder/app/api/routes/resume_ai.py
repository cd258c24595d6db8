import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from resume_builder.app.api.dependencies import get_app_settings
from resume_builder.app.core.auth import get_current_user
from resume_builder.app.core.config import Settings
from resume_builder.app.llm.orchestration import (
    GenerationError,
    analyze_resume_for_ats,
    generate_resume_content,
)
from resume_builder.app.schemas.llm import AnalyzeResumeRequest, GenerateResumeRequest
from resume_builder.app.schemas.resume import ResumeContent
from resume_builder.app.schemas.user import User
from resume_builder.app.schemas.validation import validate_resume_content

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["ai"])


def _generation_error_response(content: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )


@router.post("/generate-resume", response_model=ResumeContent)
async def generate_resume(
    payload: GenerateResumeRequest,
    settings: Annotated[Settings, Depends(get_app_settings)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """
    Generate resume content with the text-generation service.

    Args:
        payload (GenerateResumeRequest): Career level, industry, and optional job
            description and current resume.
        settings (Settings): Application settings used to reach the service.
        current_user (User): The current authenticated user.

    Returns:
        ResumeContent | JSONResponse: The generated content, or a 500 body with
            the failure message.

    Notes:
        1. Call the generation adapter.
        2. On `GenerationError`, return 500 with the error message.
        3. Validate the reply against the ResumeContent shape so malformed replies
           never reach the client or, later, storage.
        4. A reply that does not match is a 500 listing the violations.

    Network access:
        - Calls the configured LLM endpoint.

    """
    _msg = f"Generating resume content for user {current_user.id}"
    log.debug(_msg)

    try:
        content = await generate_resume_content(payload, settings)
    except GenerationError as e:
        return _generation_error_response({"message": str(e)})

    result = validate_resume_content(content)
    if not result.success:
        _msg = "Failed to generate resume: the AI service returned content that does not match the resume format"
        log.error(_msg)
        return _generation_error_response(result.to_response(message=_msg))

    return result.data


@router.post("/analyze-resume")
async def analyze_resume(
    payload: AnalyzeResumeRequest,
    settings: Annotated[Settings, Depends(get_app_settings)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """
    Score a resume against a job description for ATS optimization.

    Args:
        payload (AnalyzeResumeRequest): The resume and the job description.
        settings (Settings): Application settings used to reach the service.
        current_user (User): The current authenticated user.

    Returns:
        dict | JSONResponse: `{score, missingKeywords, suggestions}` as returned by
            the service, or a 500 body with the failure message.

    Network access:
        - Calls the configured LLM endpoint.

    """
    _msg = f"Analyzing resume for user {current_user.id}"
    log.debug(_msg)

    try:
        return await analyze_resume_for_ats(payload, settings)
    except GenerationError as e:
        return _generation_error_response({"message": str(e)})
