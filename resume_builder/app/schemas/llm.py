import logging
from typing import Any

from resume_builder.app.schemas.resume import CamelModel

log = logging.getLogger(__name__)


class GenerateResumeRequest(CamelModel):
    """Input for AI resume generation.

    Attributes:
        job_description (str | None): Target job posting text, if any.
        current_resume (str | None): Existing resume text to build on, if any.
        career_level (str): Career level such as "entry", "mid", or "senior".
        industry (str): Target industry.

    """

    job_description: str | None = None
    current_resume: str | None = None
    career_level: str
    industry: str


class AnalyzeResumeRequest(CamelModel):
    """Input for ATS analysis of a resume against a job description.

    Attributes:
        resume (Any): The resume, either as text or as a structured object.
        job_description (str): The job posting text.

    """

    resume: Any
    job_description: str
