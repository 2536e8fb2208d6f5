"""Tag and topic transfer models.

Tags and topics share one shape: a kebab-case id derived from a short
display name.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from folio.api.constants import LABEL_NAME_MAX_LENGTH


class Label(BaseModel):
    """A tag or topic."""

    id: str = Field(..., description="Kebab-case identifier")
    name: str = Field(..., description="Display name")
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LabelRef(BaseModel):
    """Reference to a topic from a listing entry."""

    id: str
    url: str


class LabelCreation(BaseModel):
    """Payload for creating or renaming a tag or topic."""

    name: str = Field(default="", description=f"Display name, at most {LABEL_NAME_MAX_LENGTH} characters")
