import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from resume_builder.app.models import Base

log = logging.getLogger(__name__)


@dataclass
class ResumeData:
    """Dataclass to hold data for Resume initialization."""

    user_id: int
    template_id: int
    title: str
    content: dict
    created_at: str | None = None


class Resume(Base):
    """Resume table row.

    Attributes:
        id (int): Unique identifier for the resume.
        user_id (int): Foreign key to User model, identifying the user who owns the resume.
        template_id (int): Foreign key to the Template used for rendering.
        title (str): User-assigned title.
        content (dict): The resume document as opaque JSON. Its shape is guaranteed
            by the validation layer, not by the database.
        created_at (str): ISO-8601 UTC timestamp set once at creation.

    """

    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    template_id = Column(Integer, ForeignKey("templates.id"), nullable=False)
    title = Column(String, nullable=False)
    content = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False)
    created_at = Column(String, nullable=False)

    user = relationship("User", back_populates="resumes")

    def __init__(self, data: ResumeData):
        """Initialize a Resume instance.

        Args:
            data (ResumeData): An object containing the data for the new resume.

        Returns:
            None

        Notes:
            1. Assigns attributes from the `data` object to the `Resume` instance.
            2. If `created_at` is not provided, stamps the current UTC time.
            3. This function does not perform disk, network, or database access.

        """
        _msg = f"Initializing Resume with title: {data.title}"
        log.debug(_msg)

        self.user_id = data.user_id
        self.template_id = data.template_id
        self.title = data.title
        self.content = data.content
        self.created_at = data.created_at or datetime.now(timezone.utc).isoformat()
