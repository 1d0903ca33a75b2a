import logging

from commerce_mcp.utils.logger import get_logger, set_level


def test_child_loggers_hang_off_package_logger():
    assert get_logger().name == "commerce_mcp"
    assert get_logger("protocol.lifecycle").name == "commerce_mcp.protocol.lifecycle"
    assert get_logger().propagate is False


def test_set_level_applies_to_handlers():
    package_logger = get_logger()
    previous = package_logger.level
    try:
        set_level("debug")
        assert package_logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in package_logger.handlers)
    finally:
        set_level(logging.getLevelName(previous))
