"""Setpoint type for trajectory control with per-axis position, velocity and acceleration."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from .context import Context
from .setpoint_base import SetpointBase, SetpointConfiguration

TRAJECTORY_SETPOINT_TOPIC = "fmu/in/trajectory_setpoint"

_NAN3 = (math.nan, math.nan, math.nan)


@dataclass
class TrajectorySetpointMessage:
    """Trajectory message; NaN entries are not controlled, a zero timestamp lets PX4 stamp it."""

    position: tuple[float, float, float] = _NAN3
    velocity: tuple[float, float, float] = _NAN3
    acceleration: tuple[float, float, float] = _NAN3
    yaw: float = math.nan
    yawspeed: float = math.nan
    timestamp: int = 0


def _vector(values: Sequence[float], size: int, what: str) -> tuple[float, ...]:
    result = tuple(float(v) for v in values)
    if len(result) != size:
        raise ValueError(f"{what} needs {size} values, got {len(result)}")
    return result


def _or_nan(value: Optional[float]) -> float:
    return math.nan if value is None else float(value)


@dataclass
class TrajectorySetpoint:
    """Per-axis trajectory setpoint in NED; unset fields are sent as NaN.

    Contradicting entries (e.g. position and velocity on the same axis) can
    make the vehicle unstable.
    """

    position_ned_m_x: Optional[float] = None
    position_ned_m_y: Optional[float] = None
    position_ned_m_z: Optional[float] = None

    velocity_ned_m_s_x: Optional[float] = None
    velocity_ned_m_s_y: Optional[float] = None
    velocity_ned_m_s_z: Optional[float] = None

    acceleration_ned_m_s2_x: Optional[float] = None
    acceleration_ned_m_s2_y: Optional[float] = None
    acceleration_ned_m_s2_z: Optional[float] = None

    yaw_ned_rad: Optional[float] = None
    yaw_rate_ned_rad_s: Optional[float] = None

    def with_position_x(self, x_ned_m: float) -> TrajectorySetpoint:
        self.position_ned_m_x = x_ned_m
        return self

    def with_position_y(self, y_ned_m: float) -> TrajectorySetpoint:
        self.position_ned_m_y = y_ned_m
        return self

    def with_position_z(self, z_ned_m: float) -> TrajectorySetpoint:
        self.position_ned_m_z = z_ned_m
        return self

    def with_velocity_x(self, x_ned_m_s: float) -> TrajectorySetpoint:
        self.velocity_ned_m_s_x = x_ned_m_s
        return self

    def with_velocity_y(self, y_ned_m_s: float) -> TrajectorySetpoint:
        self.velocity_ned_m_s_y = y_ned_m_s
        return self

    def with_velocity_z(self, z_ned_m_s: float) -> TrajectorySetpoint:
        self.velocity_ned_m_s_z = z_ned_m_s
        return self

    def with_acceleration_x(self, x_ned_m_s2: float) -> TrajectorySetpoint:
        self.acceleration_ned_m_s2_x = x_ned_m_s2
        return self

    def with_acceleration_y(self, y_ned_m_s2: float) -> TrajectorySetpoint:
        self.acceleration_ned_m_s2_y = y_ned_m_s2
        return self

    def with_acceleration_z(self, z_ned_m_s2: float) -> TrajectorySetpoint:
        self.acceleration_ned_m_s2_z = z_ned_m_s2
        return self

    def with_yaw(self, yaw_rad: float) -> TrajectorySetpoint:
        self.yaw_ned_rad = yaw_rad
        return self

    def with_yaw_rate(self, rate_rad_s: float) -> TrajectorySetpoint:
        self.yaw_rate_ned_rad_s = rate_rad_s
        return self

    def with_position(self, position_ned_m: Sequence[float]) -> TrajectorySetpoint:
        x, y, z = _vector(position_ned_m, 3, "position")
        self.position_ned_m_x, self.position_ned_m_y, self.position_ned_m_z = x, y, z
        return self

    def with_horizontal_position(self, position_ned_m: Sequence[float]) -> TrajectorySetpoint:
        x, y = _vector(position_ned_m, 2, "horizontal position")
        self.position_ned_m_x, self.position_ned_m_y = x, y
        return self

    def with_velocity(self, velocity_ned_m_s: Sequence[float]) -> TrajectorySetpoint:
        x, y, z = _vector(velocity_ned_m_s, 3, "velocity")
        self.velocity_ned_m_s_x, self.velocity_ned_m_s_y, self.velocity_ned_m_s_z = x, y, z
        return self

    def with_horizontal_velocity(self, velocity_ned_m_s: Sequence[float]) -> TrajectorySetpoint:
        x, y = _vector(velocity_ned_m_s, 2, "horizontal velocity")
        self.velocity_ned_m_s_x, self.velocity_ned_m_s_y = x, y
        return self

    def with_acceleration(self, acceleration_ned_m_s2: Sequence[float]) -> TrajectorySetpoint:
        x, y, z = _vector(acceleration_ned_m_s2, 3, "acceleration")
        self.acceleration_ned_m_s2_x = x
        self.acceleration_ned_m_s2_y = y
        self.acceleration_ned_m_s2_z = z
        return self

    def with_horizontal_acceleration(
        self, acceleration_ned_m_s2: Sequence[float]
    ) -> TrajectorySetpoint:
        x, y = _vector(acceleration_ned_m_s2, 2, "horizontal acceleration")
        self.acceleration_ned_m_s2_x, self.acceleration_ned_m_s2_y = x, y
        return self


class TrajectorySetpointType(SetpointBase):
    """Sends trajectory setpoints; local position may be declared optional."""

    def __init__(self, context: Context, local_position_is_optional: bool = False) -> None:
        super().__init__(context)
        self._local_position_is_optional = local_position_is_optional
        self._trajectory_setpoint_pub = context.node.create_publisher(
            context.topic_namespace_prefix + TRAJECTORY_SETPOINT_TOPIC, 1
        )

    def get_configuration(self) -> SetpointConfiguration:
        return SetpointConfiguration(
            rates_enabled=True,
            attitude_enabled=True,
            acceleration_enabled=True,
            position_enabled=True,
            velocity_enabled=True,
            altitude_enabled=True,
            climb_rate_enabled=True,
            local_position_is_optional=self._local_position_is_optional,
        )

    def update(
        self,
        velocity_ned_m_s: Sequence[float],
        acceleration_ned_m_s2: Optional[Sequence[float]] = None,
        yaw_ned_rad: Optional[float] = None,
        yaw_rate_ned_rad_s: Optional[float] = None,
    ) -> None:
        """Send a velocity setpoint with optional acceleration feed-forward and yaw."""
        velocity = _vector(velocity_ned_m_s, 3, "velocity")
        acceleration = (
            _NAN3
            if acceleration_ned_m_s2 is None
            else _vector(acceleration_ned_m_s2, 3, "acceleration")
        )
        self._on_update()
        self._trajectory_setpoint_pub.publish(
            TrajectorySetpointMessage(
                position=_NAN3,
                velocity=velocity,  # type: ignore[arg-type]
                acceleration=acceleration,  # type: ignore[arg-type]
                yaw=_or_nan(yaw_ned_rad),
                yawspeed=_or_nan(yaw_rate_ned_rad_s),
                timestamp=0,
            )
        )

    def update_setpoint(self, setpoint: TrajectorySetpoint) -> None:
        """Send a per-axis setpoint; unset fields go out as NaN."""
        self._on_update()
        self._trajectory_setpoint_pub.publish(
            TrajectorySetpointMessage(
                position=(
                    _or_nan(setpoint.position_ned_m_x),
                    _or_nan(setpoint.position_ned_m_y),
                    _or_nan(setpoint.position_ned_m_z),
                ),
                velocity=(
                    _or_nan(setpoint.velocity_ned_m_s_x),
                    _or_nan(setpoint.velocity_ned_m_s_y),
                    _or_nan(setpoint.velocity_ned_m_s_z),
                ),
                acceleration=(
                    _or_nan(setpoint.acceleration_ned_m_s2_x),
                    _or_nan(setpoint.acceleration_ned_m_s2_y),
                    _or_nan(setpoint.acceleration_ned_m_s2_z),
                ),
                yaw=_or_nan(setpoint.yaw_ned_rad),
                yawspeed=_or_nan(setpoint.yaw_rate_ned_rad_s),
                timestamp=0,
            )
        )

    def update_position(self, position_ned_m: Sequence[float]) -> None:
        """Send a position-only setpoint [m] NED; the go-to setpoint type is preferred."""
        position = _vector(position_ned_m, 3, "position")
        self._on_update()
        self._trajectory_setpoint_pub.publish(
            TrajectorySetpointMessage(
                position=position,  # type: ignore[arg-type]
                velocity=_NAN3,
                acceleration=_NAN3,
                yaw=math.nan,
                yawspeed=math.nan,
                timestamp=0,
            )
        )