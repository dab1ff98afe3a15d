"""Meet model for cross country competitions."""

from datetime import date

from pydantic import BaseModel, field_validator


class Meet(BaseModel):
    """A meet. Metadata is fixed once the meet is created."""

    slug: str
    name: str
    date: date
    location: str | None = None
    description: str | None = None

    @field_validator("slug", "name")
    @classmethod
    def validate_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("location", "description")
    @classmethod
    def strip_optional(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v if v else None

    def __str__(self) -> str:
        return self.name
