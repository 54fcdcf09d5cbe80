import math

import pytest

from px4_control.context import Context, Node
from px4_control.peripheral_actuators import (
    VEHICLE_CMD_DO_SET_ACTUATOR,
    PeripheralActuatorControls,
    VehicleCommand,
)


class _Clock:
    def __init__(self) -> None:
        self.t = 100.0

    def __call__(self) -> float:
        return self.t


def _setup(prefix=""):
    clock = _Clock()
    node = Node("test", clock=clock)
    received = []
    node.create_subscription(prefix + "fmu/in/vehicle_command", received.append, 10)
    controls = PeripheralActuatorControls(Context(node, prefix))
    return clock, controls, received


def test_command_sent_after_rate_limit_interval():
    clock, controls, received = _setup()
    clock.t += 0.2
    controls.set([0.1, 0.2, 0.3, 0.4, 0.5, 0.6])
    assert len(received) == 1
    cmd = received[0]
    assert cmd.command == VEHICLE_CMD_DO_SET_ACTUATOR == 187
    assert [cmd.param1, cmd.param2, cmd.param3, cmd.param4, cmd.param5, cmd.param6] == [
        0.1, 0.2, 0.3, 0.4, 0.5, 0.6,
    ]
    assert cmd.param7 == 0.0
    assert cmd.timestamp == 0


def test_command_dropped_right_after_construction():
    clock, controls, received = _setup()
    clock.t += 0.05
    controls.set([0.0] * 6)
    assert received == []


def test_rate_limit_between_calls():
    clock, controls, received = _setup()
    clock.t += 0.2
    controls.set([0.0] * 6)
    clock.t += 0.05
    controls.set([1.0] * 6)
    assert len(received) == 1
    clock.t += 0.2
    controls.set([1.0] * 6)
    assert len(received) == 2
    assert received[1].param1 == 1.0


def test_wrong_number_of_values_raises():
    _, controls, _ = _setup()
    with pytest.raises(ValueError):
        controls.set([0.0] * 5)


def test_set_single_fills_other_slots_with_nan():
    clock, controls, received = _setup()
    clock.t += 0.2
    controls.set_single(0.7, 2)
    assert len(received) == 1
    cmd = received[0]
    assert cmd.param3 == 0.7
    others = [cmd.param1, cmd.param2, cmd.param4, cmd.param5, cmd.param6]
    assert all(math.isnan(v) for v in others)


def test_set_single_default_index_is_first():
    clock, controls, received = _setup()
    clock.t += 0.2
    controls.set_single(-0.5)
    assert received[0].param1 == -0.5
    assert math.isnan(received[0].param2)


@pytest.mark.parametrize("value,index", [(math.nan, 0), (0.5, 6), (0.5, -1)])
def test_set_single_ignores_nan_and_bad_index(value, index):
    clock, controls, received = _setup()
    clock.t += 0.2
    controls.set_single(value, index)
    assert received == []


def test_topic_uses_namespace_prefix():
    clock, controls, received = _setup("drone1/")
    clock.t += 0.2
    controls.set([0.0] * 6)
    assert len(received) == 1


def test_vehicle_command_defaults():
    cmd = VehicleCommand()
    assert (cmd.command, cmd.target_system, cmd.target_component, cmd.timestamp) == (0, 0, 0, 0)