import logging

from fastapi import HTTPException, status

from resume_builder.app.schemas.resume import Resume
from resume_builder.app.storage.base import Storage

log = logging.getLogger(__name__)


def get_resume_for_user(storage: Storage, resume_id: int, user_id: int) -> Resume:
    """Retrieve a resume by its ID and verify it belongs to the specified user.

    Args:
        storage (Storage): The storage to read from.
        resume_id (int): The unique identifier for the resume to retrieve.
        user_id (int): The unique identifier for the user who must own the resume.

    Returns:
        Resume: The resume matching the provided ID and owned by the user.

    Raises:
        HTTPException: 404 "Resume not found" if the resume does not exist or
            belongs to another user.

    Notes:
        1. Read the resume by ID.
        2. Report a resume owned by someone else exactly like a missing one, so
           resume ids of other users are not disclosed.

    """
    resume = storage.get_resume(resume_id)
    if resume is None or resume.user_id != user_id:
        _msg = f"Resume {resume_id} not found for user {user_id}"
        log.debug(_msg)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resume not found")
    return resume
