import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr
from pydantic.alias_generators import to_camel

log = logging.getLogger(__name__)


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON keys.

    Notes:
        1. Python attributes are snake_case; the wire format is camelCase.
        2. Both names are accepted on input (`populate_by_name`).
        3. Unknown keys are dropped on validation.

    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


class PersonalInfo(CamelModel):
    """Contact details shown in a resume header.

    Attributes:
        full_name (str): The candidate's full name.
        email (EmailStr): A syntactically valid email address.
        phone (str): The phone number, free form.
        location (str): City, region, or other location text.

    """

    full_name: str
    email: EmailStr
    phone: str
    location: str


class Experience(CamelModel):
    """A single position held by the candidate.

    Dates are free-form strings as entered by the user.
    """

    title: str
    company: str
    location: str
    start_date: str
    end_date: str
    description: str


class Education(CamelModel):
    """A single degree or program completed by the candidate."""

    degree: str
    school: str
    location: str
    graduation_date: str


class ResumeContent(CamelModel):
    """The structured document a user edits.

    Attributes:
        personal_info (PersonalInfo): Contact details.
        summary (str): Free-text professional summary.
        experience (list[Experience]): Positions, in the order the user arranged them.
        education (list[Education]): Degrees, in the order the user arranged them.
        skills (list[str]): Skill names.

    """

    personal_info: PersonalInfo
    summary: str
    experience: list[Experience]
    education: list[Education]
    skills: list[str]


class TemplateColors(CamelModel):
    """Color configuration for a template.

    Attributes:
        primary (str): Primary accent color, e.g. "#2563eb".
        secondary (str): Secondary color used for section headings.
        sections (dict[str, str] | None): Optional per-section color overrides keyed by section name.

    """

    primary: str
    secondary: str
    sections: dict[str, str] | None = None


class TemplateStructure(CamelModel):
    """Visual layout and colors for a template."""

    layout: Literal["classic", "modern"]
    colors: TemplateColors


class Template(CamelModel):
    """A named visual layout applied to a resume's rendering."""

    id: int
    name: str
    description: str
    structure: TemplateStructure


class Resume(CamelModel):
    """A persisted resume owned by a single user.

    Attributes:
        id (int): Server-assigned identifier.
        user_id (int): Owning user.
        template_id (int): Template used for rendering. Not checked against stored templates.
        title (str): User-facing title.
        content (ResumeContent): The structured resume document.
        created_at (str): ISO-8601 UTC timestamp set once at creation.

    """

    id: int
    user_id: int
    template_id: int
    title: str
    content: ResumeContent
    created_at: str


class ResumeCreate(CamelModel):
    """Request body for creating a resume.

    The content is kept untyped here so that it can be checked with
    `validate_resume_content` and reported field by field as a 400.
    """

    template_id: int
    title: str
    content: Any = None


class ResumeUpdate(CamelModel):
    """Request body for replacing a resume's content."""

    content: Any = None
