"""Pydantic schemas for sponsors and paginated sponsor pages."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Sponsor(BaseModel):
    name: str = Field("", description="Display name; empty when the sponsor has none set")
    login: str = Field(..., description="GitHub handle")
    avatar_url: str = Field(..., alias="avatarUrl", description="Avatar image URL")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("name", mode="before")
    @classmethod
    def _null_name(cls, value):
        return value or ""

    @property
    def profile_url(self) -> str:
        return f"https://github.com/{self.login}"


class SponsorPage(BaseModel):
    sponsors: list[Sponsor] = Field(default_factory=list)
    has_next_page: bool = False
    end_cursor: Optional[str] = None
