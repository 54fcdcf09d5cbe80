"""Setpoint type for fixed-wing lateral and longitudinal control."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .context import Context
from .setpoint_base import SetpointBase, SetpointConfiguration

FW_LATERAL_SETPOINT_TOPIC = "fmu/in/fixed_wing_lateral_setpoint"
FW_LONGITUDINAL_SETPOINT_TOPIC = "fmu/in/fixed_wing_longitudinal_setpoint"
LATERAL_CONTROL_CONFIGURATION_TOPIC = "fmu/in/lateral_control_configuration"
LONGITUDINAL_CONTROL_CONFIGURATION_TOPIC = "fmu/in/longitudinal_control_configuration"


def _or_nan(value: Optional[float]) -> float:
    return math.nan if value is None else float(value)


@dataclass
class FixedWingLateralSetpoint:
    course: float = math.nan
    airspeed_direction: float = math.nan
    lateral_acceleration: float = math.nan
    timestamp: int = 0


@dataclass
class FixedWingLongitudinalSetpoint:
    altitude: float = math.nan
    height_rate: float = math.nan
    equivalent_airspeed: float = math.nan
    pitch_direct: float = math.nan
    throttle_direct: float = math.nan
    timestamp: int = 0


@dataclass
class LateralControlConfiguration:
    lateral_accel_max: float = math.nan
    timestamp: int = 0


@dataclass
class LongitudinalControlConfiguration:
    pitch_min: float = math.nan
    pitch_max: float = math.nan
    throttle_min: float = math.nan
    throttle_max: float = math.nan
    climb_rate_target: float = math.nan
    sink_rate_target: float = math.nan
    timestamp: int = 0


@dataclass
class FwLateralLongitudinalSetpoint:
    """Fixed-wing setpoint; unset fields are not controlled."""

    course: Optional[float] = None
    airspeed_direction: Optional[float] = None
    lateral_acceleration: Optional[float] = None
    altitude_msl: Optional[float] = None
    height_rate: Optional[float] = None
    equivalent_airspeed: Optional[float] = None

    def with_course(self, course_sp: float) -> FwLateralLongitudinalSetpoint:
        self.course = course_sp
        return self

    def with_airspeed_direction(self, airspeed_direction_sp: float) -> FwLateralLongitudinalSetpoint:
        self.airspeed_direction = airspeed_direction_sp
        return self

    def with_lateral_acceleration(
        self, lateral_acceleration_sp: float
    ) -> FwLateralLongitudinalSetpoint:
        self.lateral_acceleration = lateral_acceleration_sp
        return self

    def with_altitude(self, altitude_sp: float) -> FwLateralLongitudinalSetpoint:
        self.altitude_msl = altitude_sp
        return self

    def with_height_rate(self, height_rate_sp: float) -> FwLateralLongitudinalSetpoint:
        self.height_rate = height_rate_sp
        return self

    def with_equivalent_airspeed(
        self, equivalent_airspeed_sp: float
    ) -> FwLateralLongitudinalSetpoint:
        self.equivalent_airspeed = equivalent_airspeed_sp
        return self


@dataclass
class FwControlConfiguration:
    """Fixed-wing controller limits; unset fields keep the flight controller's defaults."""

    min_pitch: Optional[float] = None
    max_pitch: Optional[float] = None
    min_throttle: Optional[float] = None
    max_throttle: Optional[float] = None
    max_lateral_acceleration: Optional[float] = None
    target_climb_rate: Optional[float] = None
    target_sink_rate: Optional[float] = None

    def with_pitch_limits(self, min_pitch_sp: float, max_pitch_sp: float) -> FwControlConfiguration:
        self.min_pitch = min_pitch_sp
        self.max_pitch = max_pitch_sp
        return self

    def with_throttle_limits(
        self, min_throttle_sp: float, max_throttle_sp: float
    ) -> FwControlConfiguration:
        self.min_throttle = min_throttle_sp
        self.max_throttle = max_throttle_sp
        return self

    def with_max_acceleration(self, max_lateral_acceleration_sp: float) -> FwControlConfiguration:
        self.max_lateral_acceleration = max_lateral_acceleration_sp
        return self

    def with_target_sink_rate(self, target_sink_rate_sp: float) -> FwControlConfiguration:
        self.target_sink_rate = target_sink_rate_sp
        return self

    def with_target_climb_rate(self, target_climb_rate_sp: float) -> FwControlConfiguration:
        self.target_climb_rate = target_climb_rate_sp
        return self


class FwLateralLongitudinalSetpointType(SetpointBase):
    """Sends fixed-wing lateral/longitudinal setpoints and controller configuration."""

    def __init__(self, context: Context) -> None:
        super().__init__(context)
        node = context.node
        prefix = context.topic_namespace_prefix
        self._lateral_pub = node.create_publisher(prefix + FW_LATERAL_SETPOINT_TOPIC, 1)
        self._longitudinal_pub = node.create_publisher(prefix + FW_LONGITUDINAL_SETPOINT_TOPIC, 1)
        self._lateral_config_pub = node.create_publisher(
            prefix + LATERAL_CONTROL_CONFIGURATION_TOPIC, 1
        )
        self._longitudinal_config_pub = node.create_publisher(
            prefix + LONGITUDINAL_CONTROL_CONFIGURATION_TOPIC, 1
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

    def _publish(
        self,
        *,
        course: float,
        airspeed_direction: float,
        lateral_acceleration: float,
        altitude: float,
        height_rate: float,
        equivalent_airspeed: float,
    ) -> None:
        self._lateral_pub.publish(
            FixedWingLateralSetpoint(
                course=course,
                airspeed_direction=airspeed_direction,
                lateral_acceleration=lateral_acceleration,
            )
        )
        self._longitudinal_pub.publish(
            FixedWingLongitudinalSetpoint(
                altitude=altitude,
                height_rate=height_rate,
                equivalent_airspeed=equivalent_airspeed,
            )
        )

    def update(
        self,
        setpoint: FwLateralLongitudinalSetpoint,
        config: Optional[FwControlConfiguration] = None,
    ) -> None:
        """Send a full setpoint and, if given, a controller configuration.

        Without a configuration any previously sent one stays in effect.
        """
        self._on_update()
        self._publish(
            course=_or_nan(setpoint.course),
            airspeed_direction=_or_nan(setpoint.airspeed_direction),
            lateral_acceleration=_or_nan(setpoint.lateral_acceleration),
            altitude=_or_nan(setpoint.altitude_msl),
            height_rate=_or_nan(setpoint.height_rate),
            equivalent_airspeed=_or_nan(setpoint.equivalent_airspeed),
        )
        if config is None:
            return
        self._lateral_config_pub.publish(
            LateralControlConfiguration(lateral_accel_max=_or_nan(config.max_lateral_acceleration))
        )
        self._longitudinal_config_pub.publish(
            LongitudinalControlConfiguration(
                pitch_min=_or_nan(config.min_pitch),
                pitch_max=_or_nan(config.max_pitch),
                throttle_min=_or_nan(config.min_throttle),
                throttle_max=_or_nan(config.max_throttle),
                climb_rate_target=_or_nan(config.target_climb_rate),
                sink_rate_target=_or_nan(config.target_sink_rate),
            )
        )

    def update_with_altitude(
        self,
        altitude_amsl_sp: float,
        course_sp: float,
        equivalent_airspeed_sp: Optional[float] = None,
        lateral_acceleration_sp: Optional[float] = None,
    ) -> None:
        """Control altitude and course; a NaN course gives direct lateral acceleration control."""
        self._on_update()
        self._publish(
            course=float(course_sp),
            airspeed_direction=math.nan,
            lateral_acceleration=_or_nan(lateral_acceleration_sp),
            altitude=float(altitude_amsl_sp),
            height_rate=math.nan,
            equivalent_airspeed=_or_nan(equivalent_airspeed_sp),
        )

    def update_with_height_rate(
        self,
        height_rate_sp: float,
        course_sp: float,
        equivalent_airspeed_sp: Optional[float] = None,
        lateral_acceleration_sp: Optional[float] = None,
    ) -> None:
        """Control height rate and course; a NaN course gives direct lateral acceleration control."""
        self._on_update()
        self._publish(
            course=float(course_sp),
            airspeed_direction=math.nan,
            lateral_acceleration=_or_nan(lateral_acceleration_sp),
            altitude=math.nan,
            height_rate=float(height_rate_sp),
            equivalent_airspeed=_or_nan(equivalent_airspeed_sp),
        )