from structlog.testing import capture_logs

from nexusclient.logger import get_logger


def test_logger_binds_module_name():
    logger = get_logger("nexusclient.services.assets.store")

    with capture_logs() as logs:
        logger.info("Stored asset", path="Saves/Blueprints/Coaster.png")

    assert logs == [
        {
            "module": "nexusclient.services.assets.store",
            "event": "Stored asset",
            "path": "Saves/Blueprints/Coaster.png",
            "log_level": "info",
        }
    ]


def test_loggers_for_different_modules_are_independent():
    first = get_logger("nexusclient.a")
    second = get_logger("nexusclient.b")

    with capture_logs() as logs:
        first.warning("one")
        second.warning("two")

    assert [(entry["module"], entry["event"]) for entry in logs] == [("nexusclient.a", "one"), ("nexusclient.b", "two")]
