import pytest

from px4_control.context import Context, Node
from px4_control.goto import GOTO_SETPOINT_TOPIC, GotoSetpointType


def _setup(prefix=""):
    node = Node()
    received = []
    node.create_subscription(prefix + GOTO_SETPOINT_TOPIC, received.append, 10)
    return GotoSetpointType(Context(node, prefix)), received


def test_configuration_and_rate():
    setpoint_type, _ = _setup()
    config = setpoint_type.get_configuration()
    assert config.control_allocation_enabled and config.rates_enabled
    assert config.attitude_enabled and config.altitude_enabled
    assert config.acceleration_enabled and config.velocity_enabled
    assert config.position_enabled and config.climb_rate_enabled
    assert not config.local_position_is_optional
    assert setpoint_type.desired_update_rate_hz() == 30.0


def test_position_only_leaves_flags_off():
    setpoint_type, received = _setup()
    setpoint_type.update([1.0, 2.0, -3.0])
    msg = received[0]
    assert msg.position == (1.0, 2.0, -3.0)
    assert not msg.flag_control_heading
    assert not msg.flag_set_max_horizontal_speed
    assert not msg.flag_set_max_vertical_speed
    assert not msg.flag_set_max_heading_rate
    assert msg.heading == 0.0
    assert msg.max_horizontal_speed == 0.0
    assert msg.timestamp == 0


def test_all_constraints_set():
    setpoint_type, received = _setup("ns/")
    setpoint_type.update((0.0, 0.0, -5.0), 1.2, 4.0, 1.5, 0.6)
    msg = received[0]
    assert msg.heading == 1.2 and msg.flag_control_heading
    assert msg.max_horizontal_speed == 4.0 and msg.flag_set_max_horizontal_speed
    assert msg.max_vertical_speed == 1.5 and msg.flag_set_max_vertical_speed
    assert msg.max_heading_rate == 0.6 and msg.flag_set_max_heading_rate


def test_zero_heading_still_controlled():
    setpoint_type, received = _setup()
    setpoint_type.update([0.0, 0.0, 0.0], heading=0.0)
    assert received[0].flag_control_heading


def test_position_must_have_three_components():
    setpoint_type, received = _setup()
    with pytest.raises(ValueError):
        setpoint_type.update([1.0, 2.0])
    assert received == []


def test_should_activate_callback():
    setpoint_type, _ = _setup()
    calls = []
    setpoint_type.set_should_activate_callback(lambda: calls.append(1))
    setpoint_type.update([0.0, 0.0, 0.0])
    setpoint_type.set_active(True)
    setpoint_type.update([0.0, 0.0, 0.0])
    assert calls == [1]