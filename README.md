# px4-control

Building blocks for sending setpoints and commands to a PX4 flight controller
and for registering external components with it. Every component talks to a
`Node`, which creates publishers and subscriptions by topic name on a
message bus and supplies a clock and a logger.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Modules

- `px4_control.context` — `Node`, `Publisher`, `Subscription` and `Context`.
  - `Node(name="node", *, bus=None, clock=None)` creates publishers
    (`create_publisher(topic, depth)`) and subscriptions
    (`create_subscription(topic, callback, depth)`). Nodes built with the same
    `bus` (pass another node's `node.bus`) see each other's topics. `clock` is
    a callable returning seconds; it defaults to `time.monotonic`, and
    `node.now()` reads it.
  - `Publisher.publish(message)` hands the message to every subscription on
    the topic and also keeps it in `publisher.published`.
    `subscription_count()` reports how many subscriptions listen.
  - `Subscription` queues up to `depth` messages (the oldest are dropped) and
    calls its callback, if any, for each. `take()` returns the oldest queued
    message or `None`; `wait(timeout_s)` blocks until one is queued;
    `publisher_count()` reports how many publishers send on the topic.
  - `Context(node, topic_namespace_prefix="")` carries a node and a prefix
    put in front of every topic name. It records the setpoint types created
    with it (`setpoint_types`) and the requirement flags declared to it
    (`requirements`).
- `px4_control.requirement_flags` — `RequirementFlags`, the estimates and inputs
  a mode needs. Flags combine with `|=`, reset with `clear_all()`, and are copied
  onto an arming-check reply's `mode_req_*` attributes by
  `fill_arming_check_reply(reply)`.
- `px4_control.setpoint_base` — `SetpointBase`, the abstract base of all
  setpoint types, and `SetpointConfiguration`, the controller stages a setpoint
  type enables (`fill_control_mode(control_mode)` writes them onto a control
  mode message). A setpoint type registers itself with its context; when it is
  updated while inactive it calls the callback set with
  `set_should_activate_callback`. The default update rate is 50 Hz.
- Setpoint types (each publishes on `fmu/in/...` topics under the context's
  prefix, with a zero timestamp):
  - `px4_control.goto` — `GotoSetpointType.update(position, heading=None,
    max_horizontal_speed=None, max_vertical_speed=None, max_heading_rate=None)`;
    unset values are flagged as not controlled. 30 Hz.
  - `px4_control.trajectory` — `TrajectorySetpointType` with `update(velocity,
    acceleration=None, yaw=None, yaw_rate=None)`, `update_position(position)`
    and `update_setpoint(setpoint)`, plus the chainable builder
    `TrajectorySetpoint`. Unset fields are sent as NaN.
    `TrajectorySetpointType(context, local_position_is_optional=False)`
    passes that option into its configuration.
  - `px4_control.attitude` — `AttitudeSetpointType.update(quaternion_wxyz,
    thrust_frd, yaw_sp_move_rate_rad_s=0.0)`. 100 Hz.
  - `px4_control.rates` — `RatesSetpointType.update(rates, thrust_frd)`. 200 Hz.
  - `px4_control.direct_actuators` — `DirectActuatorsSetpointType` with
    `update_motors` (12 values) and `update_servos` (8 values); NaN means
    disarmed. All controllers are disabled. 200 Hz.
  - `px4_control.fixedwing` — `FwLateralLongitudinalSetpointType` with
    `update(setpoint, config=None)`, `update_with_altitude(...)` and
    `update_with_height_rate(...)`, and the chainable builders
    `FwLateralLongitudinalSetpoint` and `FwControlConfiguration`. 30 Hz.
- `px4_control.peripheral_actuators` — `PeripheralActuatorControls` sends six
  actuator values as a `VehicleCommand` (`set(values)`, or
  `set_single(value, index=0)` with NaN for the others). Commands closer than
  0.1 s to the previous one, or to creation, are dropped.
- `px4_control.vtol` — `VTOL`, `VTOLConfig` and `VTOLState`. `VTOL` follows
  the vehicle's VTOL status and local position. `to_multicopter()` and
  `to_fixedwing()` send a transition command (at most every 0.15 s) and return
  `False` when no status arrived in the last 2 s.
  `compute_acceleration_setpoint_during_transition(deceleration=None)` returns
  an `(x, y, nan)` acceleration setpoint, with a clamped integrator on the
  deceleration error during back-transition.
- `px4_control.registration` — `Registration` and `RegistrationSettings`.
  `do_register(settings)` sends a request with a random id, retries up to five
  times and returns `True` once the flight controller accepts it with the
  expected API version. Names must be shorter than 25 bytes. Registering twice
  raises `RuntimeError`. `do_unregister()`, `close()` or leaving a `with` block
  publishes the unregistration.
- `px4_control.wait_for_fmu` — `wait_for_fmu(node, timeout_s,
  topic_namespace_prefix="")` blocks until a message arrives on
  `fmu/out/vehicle_status` and returns `False` if the timeout passes first.

## Example

```python
from px4_control.context import Context, Node
from px4_control.trajectory import TrajectorySetpoint, TrajectorySetpointType

node = Node()
context = Context(node)
listener = node.create_subscription("fmu/in/trajectory_setpoint", None, 1)

trajectory = TrajectorySetpointType(context)
trajectory.update_setpoint(
    TrajectorySetpoint().with_horizontal_velocity((1.0, 0.5)).with_position_z(-2.0)
)

message = listener.take()
print(message.velocity, message.position)  # (1.0, 0.5, nan) (nan, nan, -2.0)
```

Combining contradicting setpoints on the same axis (for example position and
velocity) can lead to unstable behaviour.

## What this package does not do

- The bus behind `Node` is in-process only; there is no network transport or
  binding to a robotics middleware. Connecting to a real flight controller
  means routing topics to such a transport yourself.
- There is no mode or mode-executor framework driving the setpoint types and
  registration, no pose/velocity frame encodings, and no global-position or
  map-projection support for go-to setpoints.
- No command-line program is provided.