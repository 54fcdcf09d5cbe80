"""Setpoint types, component registration and vehicle control helpers for PX4 flight controllers."""

__version__ = "0.1.0"

__all__ = [
    "attitude",
    "context",
    "direct_actuators",
    "fixedwing",
    "goto",
    "peripheral_actuators",
    "rates",
    "registration",
    "requirement_flags",
    "setpoint_base",
    "trajectory",
    "vtol",
    "wait_for_fmu",
]