"""Media listing schemas."""

from pydantic import BaseModel, ConfigDict


class MediaFileItem(BaseModel):
    """One discovered file."""
    model_config = ConfigDict(from_attributes=True)

    name: str
    size: int
    extension: str
    path: str
