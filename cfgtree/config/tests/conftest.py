"""Shared fixtures for configuration tests."""

import pytest

from cfgtree.config.configuration import Configuration
from cfgtree.config.temporal import Date, DateTime, Time


@pytest.fixture
def camera_group() -> Configuration:
    """Provide a small group describing one camera."""
    group = Configuration()
    group.set_string("name", "left")
    group.set_integer64("port", 8000)
    return group


@pytest.fixture
def sample_config(camera_group: Configuration) -> Configuration:
    """Provide a configuration holding every node type."""
    config = Configuration()
    config.set_string("name", "demo")
    config.set_boolean("enabled", True)
    config.set_integer64("camera.fps", 30)
    config.set_double("camera.gain", 1.5)
    config.set_double("camera.exposure", 4.0)
    config.set_integer64_list("camera.resolution", [640, 480])
    config.set_double_list("scale", [0.5, 2.0, 3.0])
    config.set_string_list("tags", ["a", "b"])
    config.set_date("start.day", Date(2023, 5, 17))
    config.set_time("start.clock", Time(8, 30))
    config.set_date_time("start.stamp", DateTime.from_string("2023-05-17T08:30:00Z"))

    config.create_list("cameras")
    config.append("cameras", camera_group)
    camera_group.set_string("name", "right")
    camera_group.set_integer64("port", 8001)
    config.append("cameras", camera_group)

    config.create_list("polygon")
    for x, y in [(0, 0), (10, 0), (10, 5)]:
        config.append_list("polygon")
        index = config.size("polygon") - 1
        config.append(f"polygon[{index}]", x)
        config.append(f"polygon[{index}]", y)
    return config
