"""Setpoint type for direct motor and servo control."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .context import Context
from .setpoint_base import SetpointBase, SetpointConfiguration

ACTUATOR_MOTORS_TOPIC = "fmu/in/actuator_motors"
ACTUATOR_SERVOS_TOPIC = "fmu/in/actuator_servos"


@dataclass
class ActuatorMotors:
    """Motor commands; a zero timestamp lets the flight controller stamp it."""

    NUM_CONTROLS = 12

    control: list[float] = field(default_factory=lambda: [0.0] * ActuatorMotors.NUM_CONTROLS)
    timestamp: int = 0


@dataclass
class ActuatorServos:
    """Servo commands; a zero timestamp lets the flight controller stamp it."""

    NUM_CONTROLS = 8

    control: list[float] = field(default_factory=lambda: [0.0] * ActuatorServos.NUM_CONTROLS)
    timestamp: int = 0


def _commands(values: Sequence[float], expected: int, kind: str) -> list[float]:
    commands = [float(v) for v in values]
    if len(commands) != expected:
        raise ValueError(f"expected {expected} {kind} commands, got {len(commands)}")
    return commands


class DirectActuatorsSetpointType(SetpointBase):
    """Sends motor and servo outputs directly, bypassing all controllers."""

    MAX_NUM_MOTORS = ActuatorMotors.NUM_CONTROLS
    MAX_NUM_SERVOS = ActuatorServos.NUM_CONTROLS

    def __init__(self, context: Context) -> None:
        super().__init__(context)
        node = context.node
        prefix = context.topic_namespace_prefix
        self._actuator_motors_pub = node.create_publisher(prefix + ACTUATOR_MOTORS_TOPIC, 1)
        self._actuator_servos_pub = node.create_publisher(prefix + ACTUATOR_SERVOS_TOPIC, 1)

    def get_configuration(self) -> SetpointConfiguration:
        return SetpointConfiguration(
            control_allocation_enabled=False,
            rates_enabled=False,
            attitude_enabled=False,
            altitude_enabled=False,
            climb_rate_enabled=False,
            acceleration_enabled=False,
            velocity_enabled=False,
            position_enabled=False,
        )

    def desired_update_rate_hz(self) -> float:
        return 200.0

    def update_motors(self, motor_commands: Sequence[float]) -> None:
        """Send motor commands in [-1, 1]; NaN stops a motor (disarmed)."""
        commands = _commands(motor_commands, self.MAX_NUM_MOTORS, "motor")
        self._on_update()
        self._actuator_motors_pub.publish(ActuatorMotors(control=commands, timestamp=0))

    def update_servos(self, servo_commands: Sequence[float]) -> None:
        """Send servo commands in [-1, 1]; NaN maps to disarmed."""
        commands = _commands(servo_commands, self.MAX_NUM_SERVOS, "servo")
        self._on_update()
        self._actuator_servos_pub.publish(ActuatorServos(control=commands, timestamp=0))