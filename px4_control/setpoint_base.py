"""Base class for setpoint types and their controller configuration."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .context import Context

ShouldActivateCallback = Callable[[], None]


@dataclass
class SetpointConfiguration:
    """Which controller stages a setpoint type enables."""

    control_allocation_enabled: bool = True
    rates_enabled: bool = True
    attitude_enabled: bool = True
    altitude_enabled: bool = True
    acceleration_enabled: bool = True
    velocity_enabled: bool = True
    position_enabled: bool = True
    local_position_is_optional: bool = False
    climb_rate_enabled: bool = False

    def fill_control_mode(self, control_mode: Any) -> None:
        """Write the flags onto a vehicle control mode message."""
        control_mode.flag_control_rates_enabled = self.rates_enabled
        control_mode.flag_control_attitude_enabled = self.attitude_enabled
        control_mode.flag_control_acceleration_enabled = self.acceleration_enabled
        control_mode.flag_control_velocity_enabled = self.velocity_enabled
        control_mode.flag_control_position_enabled = self.position_enabled
        control_mode.flag_control_altitude_enabled = self.altitude_enabled
        control_mode.flag_control_allocation_enabled = self.control_allocation_enabled
        control_mode.flag_control_climb_rate_enabled = self.climb_rate_enabled


class SetpointBase(ABC):
    """A kind of setpoint a mode can send; registers itself with its context."""

    def __init__(self, context: Context) -> None:
        self._should_activate_cb: Optional[ShouldActivateCallback] = None
        self._active = False
        context.add_setpoint_type(self)

    @abstractmethod
    def get_configuration(self) -> SetpointConfiguration:
        """Controller configuration this setpoint type needs."""

    def desired_update_rate_hz(self) -> float:
        return 50.0

    def set_should_activate_callback(self, callback: Optional[ShouldActivateCallback]) -> None:
        self._should_activate_cb = callback

    def set_active(self, active: bool) -> None:
        self._active = active

    @property
    def active(self) -> bool:
        return self._active

    def _on_update(self) -> None:
        """Ask for activation when an inactive setpoint type gets updated."""
        if not self._active and self._should_activate_cb is not None:
            self._should_activate_cb()