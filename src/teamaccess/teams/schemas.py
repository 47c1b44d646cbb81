"""Request models for the team member endpoints."""

from pydantic import BaseModel, EmailStr, Field

NAME_PATTERN = r"^[a-zA-Z\s',-]+$"


class StoreTeamMemberRequest(BaseModel):
    """Request to add a team member."""
    name: str = Field(..., min_length=1, max_length=255, pattern=NAME_PATTERN)
    email: EmailStr
    facebook_groups_id: list[int] = Field(default_factory=list)


class UpdateTeamMemberRequest(BaseModel):
    """Request to replace a team member's group access."""
    facebook_groups_id: list[int] | None = None


class DestroyTeamMemberRequest(BaseModel):
    """Request to remove a team member."""
    id: int


class CheckEmailRequest(BaseModel):
    """Request to check whether an email is already on the team."""
    email: EmailStr


class EmailSuggestionRequest(BaseModel):
    """Autosuggest search term."""
    search: str = Field(..., min_length=1, max_length=255)
