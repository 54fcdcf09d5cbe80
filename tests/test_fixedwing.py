import math

from px4_control.context import Context, Node
from px4_control.fixedwing import (
    FW_LATERAL_SETPOINT_TOPIC,
    FW_LONGITUDINAL_SETPOINT_TOPIC,
    LATERAL_CONTROL_CONFIGURATION_TOPIC,
    LONGITUDINAL_CONTROL_CONFIGURATION_TOPIC,
    FwControlConfiguration,
    FwLateralLongitudinalSetpoint,
    FwLateralLongitudinalSetpointType,
)


def _setup(prefix=""):
    node = Node()
    topics = {}
    for topic in (
        FW_LATERAL_SETPOINT_TOPIC,
        FW_LONGITUDINAL_SETPOINT_TOPIC,
        LATERAL_CONTROL_CONFIGURATION_TOPIC,
        LONGITUDINAL_CONTROL_CONFIGURATION_TOPIC,
    ):
        received = []
        node.create_subscription(prefix + topic, received.append, 10)
        topics[topic] = received
    return FwLateralLongitudinalSetpointType(Context(node, prefix)), topics


def test_setpoint_builder_chains():
    sp = FwLateralLongitudinalSetpoint()
    result = (
        sp.with_course(0.5)
        .with_airspeed_direction(0.25)
        .with_lateral_acceleration(1.5)
        .with_altitude(100.0)
        .with_height_rate(2.0)
        .with_equivalent_airspeed(15.0)
    )
    assert result is sp
    assert (sp.course, sp.airspeed_direction, sp.lateral_acceleration) == (0.5, 0.25, 1.5)
    assert (sp.altitude_msl, sp.height_rate, sp.equivalent_airspeed) == (100.0, 2.0, 15.0)


def test_configuration_builder_chains():
    config = FwControlConfiguration()
    result = (
        config.with_pitch_limits(-0.2, 0.3)
        .with_throttle_limits(0.1, 0.9)
        .with_max_acceleration(4.0)
        .with_target_sink_rate(1.0)
        .with_target_climb_rate(3.0)
    )
    assert result is config
    assert (config.min_pitch, config.max_pitch) == (-0.2, 0.3)
    assert (config.min_throttle, config.max_throttle) == (0.1, 0.9)
    assert config.max_lateral_acceleration == 4.0
    assert (config.target_sink_rate, config.target_climb_rate) == (1.0, 3.0)


def test_defaults_are_unset():
    assert FwLateralLongitudinalSetpoint().course is None
    assert FwControlConfiguration().max_pitch is None


def test_setpoint_type_configuration_and_rate():
    setpoint_type, _ = _setup()
    config = setpoint_type.get_configuration()
    assert config.control_allocation_enabled and config.rates_enabled
    assert config.attitude_enabled and config.altitude_enabled
    assert config.acceleration_enabled and config.velocity_enabled
    assert config.position_enabled and config.climb_rate_enabled
    assert setpoint_type.desired_update_rate_hz() == 30.0


def test_update_with_altitude():
    setpoint_type, topics = _setup()
    setpoint_type.update_with_altitude(120.0, 1.0, 18.0)
    lateral = topics[FW_LATERAL_SETPOINT_TOPIC][0]
    longitudinal = topics[FW_LONGITUDINAL_SETPOINT_TOPIC][0]
    assert lateral.course == 1.0
    assert math.isnan(lateral.airspeed_direction)
    assert math.isnan(lateral.lateral_acceleration)
    assert longitudinal.altitude == 120.0
    assert math.isnan(longitudinal.height_rate)
    assert longitudinal.equivalent_airspeed == 18.0
    assert math.isnan(longitudinal.pitch_direct)
    assert math.isnan(longitudinal.throttle_direct)
    assert topics[LATERAL_CONTROL_CONFIGURATION_TOPIC] == []
    assert topics[LONGITUDINAL_CONTROL_CONFIGURATION_TOPIC] == []


def test_update_with_height_rate():
    setpoint_type, topics = _setup()
    setpoint_type.update_with_height_rate(2.5, math.nan, lateral_acceleration_sp=3.0)
    lateral = topics[FW_LATERAL_SETPOINT_TOPIC][0]
    longitudinal = topics[FW_LONGITUDINAL_SETPOINT_TOPIC][0]
    assert math.isnan(lateral.course)
    assert lateral.lateral_acceleration == 3.0
    assert math.isnan(longitudinal.altitude)
    assert longitudinal.height_rate == 2.5
    assert math.isnan(longitudinal.equivalent_airspeed)


def test_update_setpoint_only_maps_fields():
    setpoint_type, topics = _setup()
    sp = FwLateralLongitudinalSetpoint().with_airspeed_direction(0.7).with_altitude(50.0)
    setpoint_type.update(sp)
    lateral = topics[FW_LATERAL_SETPOINT_TOPIC][0]
    longitudinal = topics[FW_LONGITUDINAL_SETPOINT_TOPIC][0]
    assert math.isnan(lateral.course)
    assert lateral.airspeed_direction == 0.7
    assert longitudinal.altitude == 50.0
    assert math.isnan(longitudinal.height_rate)
    assert topics[LONGITUDINAL_CONTROL_CONFIGURATION_TOPIC] == []


def test_update_with_configuration():
    setpoint_type, topics = _setup("uav/")
    sp = FwLateralLongitudinalSetpoint().with_course(0.3).with_height_rate(1.0)
    config = FwControlConfiguration().with_pitch_limits(-0.2, 0.3).with_max_acceleration(4.0)
    setpoint_type.update(sp, config)
    lateral_config = topics[LATERAL_CONTROL_CONFIGURATION_TOPIC]
    longitudinal_config = topics[LONGITUDINAL_CONTROL_CONFIGURATION_TOPIC]
    assert len(topics[FW_LATERAL_SETPOINT_TOPIC]) == 1
    assert lateral_config[0].lateral_accel_max == 4.0
    assert longitudinal_config[0].pitch_min == -0.2
    assert longitudinal_config[0].pitch_max == 0.3
    assert math.isnan(longitudinal_config[0].throttle_min)
    assert math.isnan(longitudinal_config[0].sink_rate_target)


def test_should_activate_callback_fires():
    setpoint_type, _ = _setup()
    calls = []
    setpoint_type.set_should_activate_callback(lambda: calls.append(True))
    setpoint_type.update_with_altitude(10.0, 0.0)
    assert calls