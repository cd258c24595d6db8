import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from resume_builder.app.api.dependencies import get_storage
from resume_builder.app.schemas.resume import Template
from resume_builder.app.storage.base import Storage

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.get("", response_model=list[Template])
async def list_templates(storage: Annotated[Storage, Depends(get_storage)]):
    """
    List all resume templates. No authentication required.

    Args:
        storage (Storage): The storage dependency.

    Returns:
        list[Template]: Every seeded template.

    """
    return storage.get_templates()


@router.get("/{template_id}", response_model=Template)
async def get_template(
    template_id: int,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """
    Retrieve a single template by ID. No authentication required.

    Args:
        template_id (int): The template identifier.
        storage (Storage): The storage dependency.

    Returns:
        Template: The requested template.

    Raises:
        HTTPException: 404 if no template has the given ID.

    """
    template = storage.get_template(template_id)
    if template is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Template not found",
        )
    return template
