"""Control of peripheral actuators through vehicle commands."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .context import Context

VEHICLE_CMD_DO_SET_ACTUATOR = 187
VEHICLE_CMD_DO_VTOL_TRANSITION = 3000

VEHICLE_COMMAND_TOPIC = "fmu/in/vehicle_command"


@dataclass
class VehicleCommand:
    """A command sent to the flight controller; a zero timestamp lets it stamp the command."""

    command: int = 0
    param1: float = 0.0
    param2: float = 0.0
    param3: float = 0.0
    param4: float = 0.0
    param5: float = 0.0
    param6: float = 0.0
    param7: float = 0.0
    target_system: int = 0
    target_component: int = 0
    timestamp: int = 0


class PeripheralActuatorControls:
    """Drives the 'Peripheral Actuator Set' outputs, independent of any setpoint type."""

    NUM_ACTUATORS = 6
    MIN_UPDATE_INTERVAL_S = 0.1

    def __init__(self, context: Context) -> None:
        self._node = context.node
        self._vehicle_command_pub = self._node.create_publisher(
            context.topic_namespace_prefix + VEHICLE_COMMAND_TOPIC, 1
        )
        self._last_update = self._node.now()

    def set(self, values: Sequence[float]) -> None:
        """Set all actuators; values in [-1, 1], NaN leaves an actuator unchanged.

        Commands are rate-limited; calls arriving too soon after the last sent
        command are dropped.
        """
        values = [float(v) for v in values]
        if len(values) != self.NUM_ACTUATORS:
            raise ValueError(
                f"expected {self.NUM_ACTUATORS} actuator values, got {len(values)}"
            )
        now = self._node.now()
        if now - self._last_update <= self.MIN_UPDATE_INTERVAL_S:
            return
        self._last_update = now
        p1, p2, p3, p4, p5, p6 = values
        self._vehicle_command_pub.publish(
            VehicleCommand(
                command=VEHICLE_CMD_DO_SET_ACTUATOR,
                param1=p1,
                param2=p2,
                param3=p3,
                param4=p4,
                param5=p5,
                param6=p6,
                param7=0.0,
                timestamp=0,
            )
        )

    def set_single(self, value: float, index: int = 0) -> None:
        """Set one actuator, leaving the others unchanged; NaN or a bad index does nothing."""
        if math.isnan(value) or not 0 <= index < self.NUM_ACTUATORS:
            return
        values = [math.nan] * self.NUM_ACTUATORS
        values[index] = value
        self.set(values)