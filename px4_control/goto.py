"""Setpoint type for smooth position and heading control."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .context import Context
from .setpoint_base import SetpointBase, SetpointConfiguration

GOTO_SETPOINT_TOPIC = "fmu/in/goto_setpoint"


@dataclass
class GotoSetpoint:
    """Go-to message; unset constraints are flagged off and carry zero."""

    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    heading: float = 0.0
    flag_control_heading: bool = False
    max_horizontal_speed: float = 0.0
    max_vertical_speed: float = 0.0
    max_heading_rate: float = 0.0
    flag_set_max_horizontal_speed: bool = False
    flag_set_max_vertical_speed: bool = False
    flag_set_max_heading_rate: bool = False
    timestamp: int = 0


def _value(value: Optional[float]) -> float:
    return 0.0 if value is None else float(value)


class GotoSetpointType(SetpointBase):
    """Sends go-to setpoints in the NED earth-fixed frame."""

    def __init__(self, context: Context) -> None:
        super().__init__(context)
        self._goto_setpoint_pub = context.node.create_publisher(
            context.topic_namespace_prefix + GOTO_SETPOINT_TOPIC, 1
        )

    def get_configuration(self) -> SetpointConfiguration:
        return SetpointConfiguration(
            control_allocation_enabled=True,
            rates_enabled=True,
            attitude_enabled=True,
            altitude_enabled=True,
            acceleration_enabled=True,
            velocity_enabled=True,
            position_enabled=True,
            climb_rate_enabled=True,
        )

    def desired_update_rate_hz(self) -> float:
        return 30.0

    def update(
        self,
        position: Sequence[float],
        heading: Optional[float] = None,
        max_horizontal_speed: Optional[float] = None,
        max_vertical_speed: Optional[float] = None,
        max_heading_rate: Optional[float] = None,
    ) -> None:
        """Send a go-to setpoint: position [m] NED, heading [rad]; unset values are not controlled."""
        x, y, z = (float(v) for v in position)
        self._on_update()
        self._goto_setpoint_pub.publish(
            GotoSetpoint(
                position=(x, y, z),
                heading=_value(heading),
                flag_control_heading=heading is not None,
                max_horizontal_speed=_value(max_horizontal_speed),
                max_vertical_speed=_value(max_vertical_speed),
                max_heading_rate=_value(max_heading_rate),
                flag_set_max_horizontal_speed=max_horizontal_speed is not None,
                flag_set_max_vertical_speed=max_vertical_speed is not None,
                flag_set_max_heading_rate=max_heading_rate is not None,
                timestamp=0,
            )
        )