"""School model."""

from pydantic import BaseModel


class School(BaseModel):
    """A high school fielding a cross country team."""

    slug: str
    name: str

    def __str__(self) -> str:
        return self.name
