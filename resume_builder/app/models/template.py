import logging

from sqlalchemy import JSON, Column, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB

from resume_builder.app.models import Base

log = logging.getLogger(__name__)


class Template(Base):
    """
    Template table row.

    Attributes:
        id (int): Unique identifier for the template.
        name (str): Display name.
        description (str): Short description shown in the template picker.
        structure (dict): Layout and color configuration. Stored as opaque JSON;
            its shape is checked by `TemplateStructure` on the way out.

    """

    __tablename__ = "templates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    structure = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False)
