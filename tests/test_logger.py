import logging

from superface_agent.llm_core import get_logger


def test_module_loggers_are_children_of_the_package_logger() -> None:
    assert get_logger().name == "superface_agent"
    assert get_logger("hub").name == "superface_agent.hub"
    assert get_logger("superface_agent.hub.client").name == "superface_agent.hub.client"


def test_package_logger_has_null_handler_by_default() -> None:
    handlers = logging.getLogger("superface_agent").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)
