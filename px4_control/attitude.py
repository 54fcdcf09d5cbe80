"""Setpoint type for direct attitude control."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .context import Context
from .setpoint_base import SetpointBase, SetpointConfiguration

VEHICLE_ATTITUDE_SETPOINT_TOPIC = "fmu/in/vehicle_attitude_setpoint"


@dataclass
class VehicleAttitudeSetpoint:
    """Attitude setpoint message; q_d is (w, x, y, z), a zero timestamp lets PX4 stamp it."""

    q_d: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    thrust_body: tuple[float, float, float] = (0.0, 0.0, 0.0)
    yaw_sp_move_rate: float = 0.0
    timestamp: int = 0


def _floats(values: Sequence[float], expected: int, what: str) -> tuple[float, ...]:
    result = tuple(float(v) for v in values)
    if len(result) != expected:
        raise ValueError(f"{what} needs {expected} values, got {len(result)}")
    return result


class AttitudeSetpointType(SetpointBase):
    """Sends attitude and body thrust setpoints."""

    def __init__(self, context: Context) -> None:
        super().__init__(context)
        self._vehicle_attitude_setpoint_pub = context.node.create_publisher(
            context.topic_namespace_prefix + VEHICLE_ATTITUDE_SETPOINT_TOPIC, 1
        )

    def get_configuration(self) -> SetpointConfiguration:
        return SetpointConfiguration(
            altitude_enabled=False,
            climb_rate_enabled=False,
            acceleration_enabled=False,
            velocity_enabled=False,
            position_enabled=False,
        )

    def desired_update_rate_hz(self) -> float:
        return 100.0

    def update(
        self,
        attitude_setpoint: Sequence[float],
        thrust_setpoint_frd: Sequence[float],
        yaw_sp_move_rate_rad_s: float = 0.0,
    ) -> None:
        """Send a quaternion (w, x, y, z) attitude and FRD thrust in [-1, 1]."""
        q_d = _floats(attitude_setpoint, 4, "attitude quaternion")
        thrust = _floats(thrust_setpoint_frd, 3, "thrust setpoint")
        self._on_update()
        self._vehicle_attitude_setpoint_pub.publish(
            VehicleAttitudeSetpoint(
                q_d=q_d,  # type: ignore[arg-type]
                thrust_body=thrust,  # type: ignore[arg-type]
                yaw_sp_move_rate=float(yaw_sp_move_rate_rad_s),
                timestamp=0,
            )
        )