"""Requirement flags that a mode declares to the flight controller."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any


@dataclass
class RequirementFlags:
    """Which vehicle capabilities a mode needs; prevent_arming blocks arming in the mode."""

    angular_velocity: bool = False
    attitude: bool = False
    local_alt: bool = False
    local_position: bool = False
    local_position_relaxed: bool = False
    global_position: bool = False
    mission: bool = False
    home_position: bool = False
    prevent_arming: bool = False
    manual_control: bool = False

    def fill_arming_check_reply(self, reply: Any) -> None:
        """Copy each flag onto the reply's matching mode_req_* attribute."""
        for f in fields(self):
            setattr(reply, f"mode_req_{f.name}", getattr(self, f.name))

    def clear_all(self) -> None:
        for f in fields(self):
            setattr(self, f.name, False)

    def __ior__(self, other: RequirementFlags) -> RequirementFlags:
        if not isinstance(other, RequirementFlags):
            return NotImplemented
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) or getattr(other, f.name))
        return self