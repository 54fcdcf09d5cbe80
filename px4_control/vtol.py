"""VTOL transition commands and transition acceleration setpoints."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional

from .context import Context
from .peripheral_actuators import (
    VEHICLE_CMD_DO_VTOL_TRANSITION,
    VEHICLE_COMMAND_TOPIC,
    VehicleCommand,
)

ONE_G = 9.80665  # m/s^2

VEHICLE_VTOL_STATE_UNDEFINED = 0
VEHICLE_VTOL_STATE_TRANSITION_TO_FW = 1
VEHICLE_VTOL_STATE_TRANSITION_TO_MC = 2
VEHICLE_VTOL_STATE_MC = 3
VEHICLE_VTOL_STATE_FW = 4

VTOL_VEHICLE_STATUS_TOPIC = "fmu/out/vtol_vehicle_status"
VEHICLE_LOCAL_POSITION_TOPIC = "fmu/out/vehicle_local_position"

_STATUS_TIMEOUT_S = 2.0
_COMMAND_INTERVAL_S = 0.15
_INTEGRATOR_RESET_S = 2.0


@dataclass
class VTOLConfig:
    """Back-transition tuning: deceleration [m/s^2], I gain [rad s/m], integrator limit [rad]."""

    back_transition_deceleration: float = 2.0
    back_transition_deceleration_setpoint_to_pitch_i: float = 0.1
    deceleration_integrator_limit: float = 0.3

    def with_back_transition_deceleration(self, value: float) -> VTOLConfig:
        self.back_transition_deceleration = value
        return self

    def with_deceleration_integrator_limit(self, value: float) -> VTOLConfig:
        self.deceleration_integrator_limit = value
        return self

    def with_back_transition_deceleration_i_gain(self, value: float) -> VTOLConfig:
        self.back_transition_deceleration_setpoint_to_pitch_i = value
        return self


class VTOLState(IntEnum):
    UNDEFINED = 0
    TRANSITION_TO_FIXED_WING = 1
    TRANSITION_TO_MULTICOPTER = 2
    MULTICOPTER = 3
    FIXED_WING = 4


_STATES_BY_MESSAGE = {
    VEHICLE_VTOL_STATE_TRANSITION_TO_FW: VTOLState.TRANSITION_TO_FIXED_WING,
    VEHICLE_VTOL_STATE_TRANSITION_TO_MC: VTOLState.TRANSITION_TO_MULTICOPTER,
    VEHICLE_VTOL_STATE_MC: VTOLState.MULTICOPTER,
    VEHICLE_VTOL_STATE_FW: VTOLState.FIXED_WING,
}


class VTOL:
    """Tracks the VTOL state and commands transitions between multicopter and fixed-wing."""

    def __init__(self, context: Context, config: Optional[VTOLConfig] = None) -> None:
        self._node = context.node
        self._config = config if config is not None else VTOLConfig()
        prefix = context.topic_namespace_prefix

        self._current_state = VTOLState.UNDEFINED
        self._last_vtol_vehicle_status_received: Optional[float] = None
        self._last_pitch_integrator_update = -math.inf
        self._vehicle_heading = math.nan
        self._vehicle_acceleration_xy = (math.nan, math.nan)
        self._decel_error_bt_int = 0.0

        self._vehicle_command_pub = self._node.create_publisher(
            prefix + VEHICLE_COMMAND_TOPIC, 1
        )
        self._vtol_vehicle_status_sub = self._node.create_subscription(
            prefix + VTOL_VEHICLE_STATUS_TOPIC, self._on_vtol_vehicle_status, 10
        )
        self._vehicle_local_position_sub = self._node.create_subscription(
            prefix + VEHICLE_LOCAL_POSITION_TOPIC, self._on_vehicle_local_position, 10
        )
        self._last_command_sent = self._node.now()

    def _on_vtol_vehicle_status(self, msg: Any) -> None:
        self._last_vtol_vehicle_status_received = self._node.now()
        self._current_state = _STATES_BY_MESSAGE.get(
            msg.vehicle_vtol_state, VTOLState.UNDEFINED
        )

    def _on_vehicle_local_position(self, msg: Any) -> None:
        self._vehicle_heading = msg.heading
        self._vehicle_acceleration_xy = (msg.ax, msg.ay)

    def current_state(self) -> VTOLState:
        return self._current_state

    def _transition(self, from_states: tuple[VTOLState, ...], target: int) -> bool:
        now = self._node.now()
        received = self._last_vtol_vehicle_status_received
        if received is None or now - received >= _STATUS_TIMEOUT_S:
            self._node.logger.warning(
                "Current VTOL vehicle state unknown. Not able to transition."
            )
            return False
        if (
            self._current_state in from_states
            and now - self._last_command_sent > _COMMAND_INTERVAL_S
        ):
            self._last_command_sent = now
            self._vehicle_command_pub.publish(
                VehicleCommand(
                    command=VEHICLE_CMD_DO_VTOL_TRANSITION,
                    param1=float(target),
                    param2=0.0,
                    target_system=0,
                    target_component=1,
                )
            )
        return True

    def to_multicopter(self) -> bool:
        """Request a back-transition; False if the VTOL state is not known."""
        return self._transition(
            (VTOLState.FIXED_WING, VTOLState.TRANSITION_TO_FIXED_WING),
            VEHICLE_VTOL_STATE_MC,
        )

    def to_fixedwing(self) -> bool:
        """Request a front-transition; False if the VTOL state is not known."""
        return self._transition(
            (VTOLState.MULTICOPTER, VTOLState.TRANSITION_TO_MULTICOPTER),
            VEHICLE_VTOL_STATE_FW,
        )

    def compute_acceleration_setpoint_during_transition(
        self, back_transition_deceleration_m_s2: Optional[float] = None
    ) -> tuple[float, float, float]:
        """NED acceleration setpoint (x, y, NaN) to use while transitioning."""
        dir_x = math.cos(self._vehicle_heading)
        dir_y = math.sin(self._vehicle_heading)
        pitch_setpoint = 0.0
        if self._current_state == VTOLState.TRANSITION_TO_MULTICOPTER:
            pitch_setpoint = self._compute_pitch_setpoint_during_backtransition(
                back_transition_deceleration_m_s2
            )
        scale = math.tan(pitch_setpoint) * ONE_G
        return (scale * -dir_x, scale * -dir_y, math.nan)

    def _compute_pitch_setpoint_during_backtransition(
        self, back_transition_deceleration_m_s2: Optional[float]
    ) -> float:
        deceleration_setpoint = (
            back_transition_deceleration_m_s2
            if back_transition_deceleration_m_s2 is not None
            else self._config.back_transition_deceleration
        )
        dir_x = math.cos(self._vehicle_heading)
        dir_y = math.sin(self._vehicle_heading)
        ax, ay = self._vehicle_acceleration_xy
        deceleration = -(ax * dir_x + ay * dir_y)
        deceleration_error = deceleration_setpoint - deceleration

        now = self._node.now()
        dt = now - self._last_pitch_integrator_update
        self._last_pitch_integrator_update = now

        if dt > _INTEGRATOR_RESET_S:
            dt = 0.0
            self._decel_error_bt_int = 0.0

        # Without local position the deceleration is unknown; hold the integrator.
        if math.isnan(deceleration):
            return self._decel_error_bt_int

        self._decel_error_bt_int += (
            self._config.back_transition_deceleration_setpoint_to_pitch_i
            * deceleration_error
            * dt
        )
        self._decel_error_bt_int = min(
            max(self._decel_error_bt_int, 0.0), self._config.deceleration_integrator_limit
        )
        return self._decel_error_bt_int