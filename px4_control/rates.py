"""Setpoint type for direct body rate control."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .context import Context
from .setpoint_base import SetpointBase, SetpointConfiguration

VEHICLE_RATES_SETPOINT_TOPIC = "fmu/in/vehicle_rates_setpoint"


@dataclass
class VehicleRatesSetpoint:
    """Rates setpoint message; a zero timestamp lets PX4 stamp it."""

    roll: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0
    thrust_body: tuple[float, float, float] = (0.0, 0.0, 0.0)
    timestamp: int = 0


def _vec3(values: Sequence[float], what: str) -> tuple[float, float, float]:
    result = tuple(float(v) for v in values)
    if len(result) != 3:
        raise ValueError(f"{what} needs 3 values, got {len(result)}")
    return result  # type: ignore[return-value]


class RatesSetpointType(SetpointBase):
    """Sends angular rate and body thrust setpoints."""

    def __init__(self, context: Context) -> None:
        super().__init__(context)
        self._vehicle_rates_setpoint_pub = context.node.create_publisher(
            context.topic_namespace_prefix + VEHICLE_RATES_SETPOINT_TOPIC, 1
        )

    def get_configuration(self) -> SetpointConfiguration:
        return SetpointConfiguration(
            attitude_enabled=False,
            altitude_enabled=False,
            climb_rate_enabled=False,
            acceleration_enabled=False,
            velocity_enabled=False,
            position_enabled=False,
        )

    def desired_update_rate_hz(self) -> float:
        return 200.0

    def update(
        self,
        rate_setpoints_ned_rad: Sequence[float],
        thrust_setpoint_frd: Sequence[float],
    ) -> None:
        """Send roll, pitch, yaw rates [rad/s] and FRD thrust in [-1, 1]."""
        roll, pitch, yaw = _vec3(rate_setpoints_ned_rad, "rate setpoint")
        thrust = _vec3(thrust_setpoint_frd, "thrust setpoint")
        self._on_update()
        self._vehicle_rates_setpoint_pub.publish(
            VehicleRatesSetpoint(
                roll=roll, pitch=pitch, yaw=yaw, thrust_body=thrust, timestamp=0
            )
        )