import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse

from resume_builder.app.api.dependencies import get_storage
from resume_builder.app.api.routes.route_logic.resume_crud import get_resume_for_user
from resume_builder.app.core.auth import get_current_user
from resume_builder.app.schemas.resume import Resume, ResumeCreate, ResumeUpdate
from resume_builder.app.schemas.user import User
from resume_builder.app.schemas.validation import validate_resume_content
from resume_builder.app.storage.base import Storage
from resume_builder.app.storage.errors import (
    ResumeNotFoundError,
    StorageError,
    TemplateNotFoundError,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resumes", tags=["resumes"])


def _storage_error_response(error: StorageError) -> JSONResponse:
    _msg = f"Storage operation failed: {error!s}"
    log.exception(_msg)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": str(error)},
    )


@router.get("", response_model=list[Resume])
async def list_resumes(
    storage: Annotated[Storage, Depends(get_storage)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """
    List all resumes for the current user.

    Args:
        storage (Storage): The storage dependency.
        current_user (User): The current authenticated user.

    Returns:
        list[Resume]: Every resume owned by the user.

    """
    return storage.get_resumes_by_user(current_user.id)


@router.post("", response_model=Resume, status_code=status.HTTP_201_CREATED)
async def create_resume(
    payload: ResumeCreate,
    storage: Annotated[Storage, Depends(get_storage)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """
    Save a new resume for the current user.

    Args:
        payload (ResumeCreate): Template id, title, and untyped content.
        storage (Storage): The storage dependency.
        current_user (User): The current authenticated user.

    Returns:
        Resume | JSONResponse: The created resume (201), a 400 body listing every
            content violation or naming an unknown template, or a 500 body with
            the storage error message.

    Notes:
        1. Validate the content against the ResumeContent shape.
        2. If validation fails, return 400 with field-level errors.
        3. Store the resume under the current user's id.
        4. If the template does not exist, return 400 with a message.
        5. Unknown content fields are dropped before storing.

    """
    result = validate_resume_content(payload.content)
    if not result.success:
        _msg = f"Rejected resume content from user {current_user.id}"
        log.debug(_msg)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=result.to_response(),
        )

    try:
        resume = storage.create_resume(
            user_id=current_user.id,
            template_id=payload.template_id,
            title=payload.title,
            content=result.data,
        )
    except TemplateNotFoundError as e:
        _msg = f"Rejected resume for unknown template {e.template_id}"
        log.debug(_msg)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": str(e)},
        )
    except StorageError as e:
        return _storage_error_response(e)

    _msg = f"Created resume {resume.id} for user {current_user.id}"
    log.info(_msg)
    return resume


@router.get("/{resume_id}", response_model=Resume)
async def get_resume(
    resume_id: int,
    storage: Annotated[Storage, Depends(get_storage)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """
    Retrieve a specific resume by ID for the current user.

    Raises:
        HTTPException: 404 if the resume does not exist or belongs to another user.

    """
    return get_resume_for_user(storage, resume_id=resume_id, user_id=current_user.id)


@router.put("/{resume_id}", response_model=Resume)
async def update_resume(
    resume_id: int,
    payload: ResumeUpdate,
    storage: Annotated[Storage, Depends(get_storage)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """
    Replace the content of one of the current user's resumes.

    Args:
        resume_id (int): The resume to update.
        payload (ResumeUpdate): The new untyped content.
        storage (Storage): The storage dependency.
        current_user (User): The current authenticated user.

    Returns:
        Resume | JSONResponse: The updated resume, or a 400 body listing every content violation.

    Raises:
        HTTPException: 404 if the resume does not exist or belongs to another user.

    Notes:
        1. Verify ownership before looking at the content.
        2. Validate the content; return 400 on failure.
        3. Replace the content only; id, owner, template, title, and creation time are unchanged.

    """
    get_resume_for_user(storage, resume_id=resume_id, user_id=current_user.id)

    result = validate_resume_content(payload.content)
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=result.to_response(),
        )

    try:
        return storage.update_resume(resume_id, result.data)
    except ResumeNotFoundError:
        # Deleted between the ownership check and the update.
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resume not found")
    except StorageError as e:
        return _storage_error_response(e)


@router.delete("/{resume_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resume(
    resume_id: int,
    storage: Annotated[Storage, Depends(get_storage)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """
    Delete one of the current user's resumes.

    Deleting an id that does not exist succeeds, matching the idempotent
    storage contract. Deleting another user's resume is reported as 404.

    Args:
        resume_id (int): The resume to delete.
        storage (Storage): The storage dependency.
        current_user (User): The current authenticated user.

    Returns:
        Response: An empty 204 response.

    """
    resume = storage.get_resume(resume_id)
    if resume is not None and resume.user_id != current_user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resume not found")

    storage.delete_resume(resume_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
