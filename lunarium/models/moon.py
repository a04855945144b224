"""
Moon phase model.
"""
from pydantic import BaseModel, ConfigDict


class MoonInfo(BaseModel):
    """Lunar phase shown next to a calendar day."""
    model_config = ConfigDict(frozen=True)

    emoji: str
    name: str
    age: float  # days since new moon, one decimal
