from loguru import logger

from statement_checker.domain.services import ValidationRuleEngine
from statement_checker.log_config import configure_logging

from helpers import make_record


def test_configure_logging_returns_removable_sink():
    sink_id = configure_logging("WARNING")

    logger.remove(sink_id)


def test_engine_emits_summary_log():
    messages: list[str] = []
    sink_id = logger.add(messages.append, level="INFO", format="{message}")
    try:
        ValidationRuleEngine().validate([make_record(1), make_record(1)])
    finally:
        logger.remove(sink_id)

    assert any("2 total records, 2 failed records" in message for message in messages)
