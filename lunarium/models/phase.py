"""
Phase model definitions for menstrual cycle phases.
"""
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field


class PhaseName(str, Enum):
    """
    Cycle phases as shown to the user.
    """
    MENSTRUATION = "Menstruation"
    FOLLICULAR = "Folliculaire"
    OVULATION = "Ovulation"
    LUTEAL = "Lutéale"
    PMS = "SPM"


class FlatColor(BaseModel):
    """A single solid colour."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["flat"] = "flat"
    hex: str


class BlendColor(BaseModel):
    """
    A two-stop linear blend between the flat colours of two adjacent phases.

    Marks a boundary day; the rendering layer draws the gradient.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["blend"] = "blend"
    start: str
    end: str


PhaseColor = Annotated[Union[FlatColor, BlendColor], Field(discriminator="kind")]


class PhaseInfo(BaseModel):
    """
    Presentation details for a single cycle day.
    """
    model_config = ConfigDict(frozen=True)

    name: PhaseName
    short_name: str
    color: PhaseColor
    border: str
    text: str
    description: str

    @computed_field
    @property
    def is_gradient(self) -> bool:
        """Whether this day sits on a boundary between two phases."""
        return isinstance(self.color, BlendColor)
