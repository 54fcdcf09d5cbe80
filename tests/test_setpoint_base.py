from types import SimpleNamespace

import pytest

from px4_control.context import Context, Node
from px4_control.setpoint_base import SetpointBase, SetpointConfiguration


class _RecordingContext(Context):
    def __init__(self, node):
        super().__init__(node)
        self.setpoints = []

    def add_setpoint_type(self, setpoint):
        self.setpoints.append(setpoint)


class _Setpoint(SetpointBase):
    def get_configuration(self):
        return SetpointConfiguration(position_enabled=False)

    def update(self):
        self._on_update()


def test_registers_with_context():
    ctx = _RecordingContext(Node())
    sp = _Setpoint(ctx)
    assert ctx.setpoints == [sp]


def test_abstract_base_cannot_be_instantiated():
    with pytest.raises(TypeError):
        SetpointBase(Context(Node()))


def test_default_update_rate():
    assert _Setpoint(Context(Node())).desired_update_rate_hz() == 50.0


def test_update_triggers_activation_only_when_inactive():
    sp = _Setpoint(Context(Node()))
    calls = []
    sp.set_should_activate_callback(lambda: calls.append(True))
    sp.update()
    assert calls == [True]
    sp.set_active(True)
    sp.update()
    assert calls == [True]
    assert sp.active is True


def test_update_without_callback_keeps_inactive():
    sp = _Setpoint(Context(Node()))
    sp.update()
    assert sp.active is False


def test_configuration_defaults():
    config = SetpointConfiguration()
    assert config.control_allocation_enabled is True
    assert config.climb_rate_enabled is False
    assert config.local_position_is_optional is False


def test_fill_control_mode():
    config = _Setpoint(Context(Node())).get_configuration()
    mode = SimpleNamespace()
    config.fill_control_mode(mode)
    assert mode.flag_control_position_enabled is False
    assert mode.flag_control_rates_enabled is True
    assert mode.flag_control_allocation_enabled is True
    assert mode.flag_control_climb_rate_enabled is False
    assert sorted(vars(mode)) == sorted(
        [
            "flag_control_rates_enabled",
            "flag_control_attitude_enabled",
            "flag_control_acceleration_enabled",
            "flag_control_velocity_enabled",
            "flag_control_position_enabled",
            "flag_control_altitude_enabled",
            "flag_control_allocation_enabled",
            "flag_control_climb_rate_enabled",
        ]
    )