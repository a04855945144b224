"""
Geometry models for the circular cycle wheel.

Angles are in radians, measured the SVG way: 0 points right and positive
angles turn clockwise, so -pi/2 is the top of the circle.
"""
import math
from typing import List

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Point(BaseModel):
    """Cartesian point in drawing coordinates."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class WheelRadii(BaseModel):
    """Ring dimensions and centre of the wheel."""
    model_config = ConfigDict(frozen=True)

    outer: float = Field(..., gt=0)
    inner: float = Field(..., ge=0)
    center_x: float = 0.0
    center_y: float = 0.0


class SegmentGeometry(BaseModel):
    """
    Annular wedge for one cycle day, before rotation.

    Corners are listed in drawing order: along the outer arc, across to the
    inner arc, back along the inner arc.
    """
    model_config = ConfigDict(frozen=True)

    day: int
    start_angle: float
    end_angle: float
    outer_start: Point
    outer_end: Point
    inner_end: Point
    inner_start: Point
    outer_radius: float
    inner_radius: float
    large_arc: bool = False

    @property
    def center_angle(self) -> float:
        """Angle of the middle of the wedge."""
        return (self.start_angle + self.end_angle) / 2

    def path(self) -> str:
        """SVG path description of the wedge."""
        large = 1 if self.large_arc else 0
        return (
            f"M {self.outer_start.x:.3f} {self.outer_start.y:.3f} "
            f"A {self.outer_radius:.3f} {self.outer_radius:.3f} 0 {large} 1 "
            f"{self.outer_end.x:.3f} {self.outer_end.y:.3f} "
            f"L {self.inner_end.x:.3f} {self.inner_end.y:.3f} "
            f"A {self.inner_radius:.3f} {self.inner_radius:.3f} 0 {large} 0 "
            f"{self.inner_start.x:.3f} {self.inner_start.y:.3f} Z"
        )


class DayLabel(BaseModel):
    """Day number label, already rotated with its wedge."""
    model_config = ConfigDict(frozen=True)

    day: int
    angle: float
    position: Point


class WheelLayout(BaseModel):
    """Full wheel: every wedge plus the single rotation applied to all of them."""
    model_config = ConfigDict(frozen=True)

    cycle_length: int
    current_day: int
    angle_per_day: float
    rotation: float
    segments: List[SegmentGeometry]
    labels: List[DayLabel]

    @computed_field
    @property
    def rotation_degrees(self) -> float:
        """Rotation for an SVG ``rotate()`` transform."""
        return math.degrees(self.rotation)
