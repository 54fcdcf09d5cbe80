"""Waiting until the flight controller publishes its vehicle status."""

from __future__ import annotations

from .context import Node

VEHICLE_STATUS_TOPIC = "fmu/out/vehicle_status"


def wait_for_fmu(node: Node, timeout_s: float, topic_namespace_prefix: str = "") -> bool:
    """Block until a vehicle status message arrives; False if the timeout passes first."""
    node.logger.debug("Waiting for FMU...")
    subscription = node.create_subscription(
        topic_namespace_prefix + VEHICLE_STATUS_TOPIC, None, 1
    )
    start = node.now()
    while True:
        elapsed = node.now() - start
        if elapsed >= timeout_s:
            return False
        if not subscription.wait(timeout_s - elapsed):
            node.logger.debug("timeout while waiting for FMU")
            continue
        if subscription.take() is not None:
            return True
        node.logger.debug("no VehicleStatus message received")