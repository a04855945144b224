"""
Service module for the circular cycle wheel layout.

The wheel has one wedge per cycle day, laid out clockwise from the top of
the circle. All wedges are drawn unrotated and then turned together by a
single rotation that brings the centre of today's wedge to the top marker.
Labels get the same rotation added to their own angle so they stay on
their wedges.

Typical usage:
    radii = WheelRadii(outer=180, inner=120, center_x=200, center_y=200)
    layout = build_wheel(cycle_length=28, current_cycle_day=9, radii=radii)
    for segment in layout.segments:
        draw(segment.path(), rotate=layout.rotation_degrees)
"""
import math
from typing import Optional

from lunarium.models.wheel import DayLabel, Point, SegmentGeometry, WheelLayout, WheelRadii

TOP_ANGLE = -math.pi / 2


def angle_per_day(cycle_length: int) -> float:
    """Angular width of one day's wedge."""
    return 2 * math.pi / cycle_length


def polar_to_cartesian(radius: float, angle: float, center_x: float = 0.0, center_y: float = 0.0) -> Point:
    return Point(
        x=center_x + radius * math.cos(angle),
        y=center_y + radius * math.sin(angle)
    )


def segment_geometry(day_index: int, cycle_length: int, radii: WheelRadii) -> SegmentGeometry:
    """
    Compute the unrotated wedge of one cycle day.

    Day 1 occupies the first slice, starting at the top of the circle.

    Args:
        day_index: Cycle day (1-based)
        cycle_length: Number of wedges in the wheel
        radii: Ring dimensions

    Returns:
        Wedge angles and corner points
    """
    step = angle_per_day(cycle_length)
    start_angle = TOP_ANGLE + (day_index - 1) * step
    end_angle = start_angle + step

    def corner(radius: float, angle: float) -> Point:
        return polar_to_cartesian(radius, angle, radii.center_x, radii.center_y)

    return SegmentGeometry(
        day=day_index,
        start_angle=start_angle,
        end_angle=end_angle,
        outer_start=corner(radii.outer, start_angle),
        outer_end=corner(radii.outer, end_angle),
        inner_end=corner(radii.inner, end_angle),
        inner_start=corner(radii.inner, start_angle),
        outer_radius=radii.outer,
        inner_radius=radii.inner,
        large_arc=step > math.pi
    )


def rotation_offset(current_cycle_day: int, day_angle: float) -> float:
    """
    Rotation that puts the centre of today's wedge at the top marker.

    Args:
        current_cycle_day: Today's cycle day
        day_angle: Angular width of one wedge

    Returns:
        Rotation in radians
    """
    return -((current_cycle_day - 0.5) * day_angle)


def label_angle(day_index: int, cycle_length: int, rotation: float) -> float:
    """Angle of a day label once the wheel is rotated."""
    step = angle_per_day(cycle_length)
    return TOP_ANGLE + (day_index - 0.5) * step + rotation


def build_wheel(
    cycle_length: int,
    current_cycle_day: int,
    radii: WheelRadii,
    label_radius: Optional[float] = None
) -> WheelLayout:
    """
    Lay out the full wheel for a cycle.

    Args:
        cycle_length: Number of days in the cycle
        current_cycle_day: Today's cycle day, anchored at the top
        radii: Ring dimensions
        label_radius: Distance of day labels from the centre, defaults to
            the middle of the ring

    Returns:
        WheelLayout with unrotated segments, the rotation and rotated labels
    """
    step = angle_per_day(cycle_length)
    rotation = rotation_offset(current_cycle_day, step)
    if label_radius is None:
        label_radius = (radii.outer + radii.inner) / 2

    segments = []
    labels = []
    for day in range(1, cycle_length + 1):
        segments.append(segment_geometry(day, cycle_length, radii))
        angle = label_angle(day, cycle_length, rotation)
        labels.append(DayLabel(
            day=day,
            angle=angle,
            position=polar_to_cartesian(label_radius, angle, radii.center_x, radii.center_y)
        ))

    return WheelLayout(
        cycle_length=cycle_length,
        current_day=current_cycle_day,
        angle_per_day=step,
        rotation=rotation,
        segments=segments,
        labels=labels
    )
