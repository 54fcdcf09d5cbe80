"""Registration of external components (arming checks, modes, executors) with the FMU."""

from __future__ import annotations

import dataclasses
import random
import time
from dataclasses import dataclass
from typing import Optional

from .context import Node

PX4_ROS2_API_VERSION = 1

# Size of the fixed name field in the registration messages, terminator included.
NAME_SIZE = 25

MODE_ID_INVALID = 0xFF

REGISTER_REPLY_TOPIC = "fmu/out/register_ext_component_reply"
REGISTER_REQUEST_TOPIC = "fmu/in/register_ext_component_request"
UNREGISTER_TOPIC = "fmu/in/unregister_ext_component"

MAX_REQUEST_ATTEMPTS = 5


@dataclass
class RegistrationSettings:
    """What an external component asks the FMU to register."""

    name: str
    register_arming_check: bool = False
    register_mode: bool = False
    register_mode_executor: bool = False
    enable_replace_internal_mode: bool = False
    replace_internal_mode: int = 0
    activate_mode_immediately: bool = False


@dataclass
class RegisterExtComponentRequest:
    name: str = ""
    register_arming_check: bool = False
    register_mode: bool = False
    register_mode_executor: bool = False
    enable_replace_internal_mode: bool = False
    replace_internal_mode: int = 0
    activate_mode_immediately: bool = False
    px4_ros2_api_version: int = 0
    request_id: int = 0
    timestamp: int = 0


@dataclass
class RegisterExtComponentReply:
    name: str = ""
    request_id: int = 0
    success: bool = False
    px4_ros2_api_version: int = 0
    arming_check_id: int = -1
    mode_id: int = MODE_ID_INVALID
    mode_executor_id: int = -1
    timestamp: int = 0


@dataclass
class UnregisterExtComponent:
    name: str = ""
    arming_check_id: int = -1
    mode_id: int = MODE_ID_INVALID
    mode_executor_id: int = -1
    timestamp: int = 0


class Registration:
    """Registers a component with the FMU and unregisters it again when closed."""

    def __init__(
        self,
        node: Node,
        topic_namespace_prefix: str = "",
        *,
        reply_timeout_s: float = 1.0,
        discovery_attempts: int = 100,
        discovery_interval_s: float = 0.1,
    ) -> None:
        self._node = node
        self._reply_timeout_s = reply_timeout_s
        self._discovery_attempts = discovery_attempts
        self._discovery_interval_s = discovery_interval_s

        self._reply_sub = node.create_subscription(
            topic_namespace_prefix + REGISTER_REPLY_TOPIC, None, 1
        )
        self._request_pub = node.create_publisher(
            topic_namespace_prefix + REGISTER_REQUEST_TOPIC, 1
        )
        self._unregister_pub = node.create_publisher(
            topic_namespace_prefix + UNREGISTER_TOPIC, 1
        )
        self._registered = False
        self._unregister = UnregisterExtComponent()

    @property
    def registered(self) -> bool:
        return self._registered

    @property
    def arming_check_id(self) -> int:
        return self._unregister.arming_check_id

    @property
    def mode_id(self) -> int:
        return self._unregister.mode_id

    @property
    def mode_executor_id(self) -> int:
        return self._unregister.mode_executor_id

    @property
    def name(self) -> str:
        return self._unregister.name

    def _wait_for(self, found, message: str) -> None:
        for _ in range(self._discovery_attempts):
            if found():
                self._node.logger.debug(message)
                return
            time.sleep(self._discovery_interval_s)

    def do_register(self, settings: RegistrationSettings) -> bool:
        """Send a registration request and wait for the reply; True when registered."""
        if self._registered:
            raise RuntimeError("component is already registered")
        logger = self._node.logger

        name_length = len(settings.name.encode())
        if name_length >= NAME_SIZE:
            logger.error("Name too long (%i >= %i)", name_length, NAME_SIZE)
            return False

        logger.debug(
            "Registering '%s' (arming check: %i, mode: %i, mode executor: %i)",
            settings.name,
            settings.register_arming_check,
            settings.register_mode,
            settings.register_mode_executor,
        )

        request = RegisterExtComponentRequest(
            name=settings.name,
            register_arming_check=settings.register_arming_check,
            register_mode=settings.register_mode,
            register_mode_executor=settings.register_mode_executor,
            enable_replace_internal_mode=settings.enable_replace_internal_mode,
            replace_internal_mode=settings.replace_internal_mode,
            activate_mode_immediately=settings.activate_mode_immediately,
            px4_ros2_api_version=PX4_ROS2_API_VERSION,
            request_id=random.getrandbits(64),
        )

        # The subscriber on the FMU side may take a while to show up initially.
        self._wait_for(
            lambda: self._request_pub.subscription_count() > 0,
            "Subscriber found, continuing",
        )

        got_reply = False
        for attempt in range(MAX_REQUEST_ATTEMPTS):
            if got_reply:
                break
            self._request_pub.publish(dataclasses.replace(request, timestamp=0))

            if attempt == 0:
                self._wait_for(
                    lambda: self._reply_sub.publisher_count() > 0,
                    "Publisher found, continuing",
                )

            start = time.monotonic()
            while not got_reply:
                elapsed = time.monotonic() - start
                if elapsed >= self._reply_timeout_s:
                    break
                if not self._reply_sub.wait(self._reply_timeout_s - elapsed):
                    logger.info("timeout while registering external component")
                    continue
                reply: Optional[RegisterExtComponentReply] = self._reply_sub.take()
                if reply is None:
                    logger.info("no RegisterExtComponentReply message received")
                    continue
                if (
                    reply.name[: NAME_SIZE - 1] != settings.name
                    or reply.request_id != request.request_id
                ):
                    continue
                logger.debug("Got RegisterExtComponentReply")
                got_reply = True
                if not reply.success:
                    logger.error("Registration failed")
                elif reply.px4_ros2_api_version != PX4_ROS2_API_VERSION:
                    logger.critical(
                        "Incompatible ROS2 library API version: got %i, expected %i",
                        reply.px4_ros2_api_version,
                        PX4_ROS2_API_VERSION,
                    )
                else:
                    self._unregister.arming_check_id = reply.arming_check_id
                    self._unregister.mode_id = reply.mode_id
                    self._unregister.mode_executor_id = reply.mode_executor_id
                    self._unregister.name = settings.name
                    self._registered = True

        return self._registered

    def do_unregister(self) -> None:
        """Tell the FMU the component is gone, if it is registered."""
        if not self._registered:
            return
        self._node.logger.debug("Unregistering")
        self._unregister_pub.publish(dataclasses.replace(self._unregister, timestamp=0))
        self._registered = False

    def set_registration_details(
        self, arming_check_id: int, mode_id: int, mode_executor_id: int
    ) -> None:
        """Mark the component registered with the given ids, without asking the FMU."""
        self._unregister.arming_check_id = arming_check_id
        self._unregister.mode_id = mode_id
        self._unregister.mode_executor_id = mode_executor_id
        self._registered = True

    def close(self) -> None:
        self.do_unregister()

    def __enter__(self) -> Registration:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()