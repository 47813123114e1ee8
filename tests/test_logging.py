import logging

from storefront_api.app.core.config import settings
from storefront_api.app.core.logging_config import setup_logging


def test_handlers_attached_once_and_file_written(tmp_path, monkeypatch):
    log_path = tmp_path / "storefront.log"
    monkeypatch.setattr(settings, "log_level", "debug")
    monkeypatch.setattr(settings, "log_file", str(log_path))

    logger = setup_logging("storefront_test_logging")
    try:
        setup_logging("storefront_test_logging")
        assert logger.level == logging.DEBUG
        assert sorted(handler.get_name() for handler in logger.handlers) == [
            "storefront-console",
            "storefront-file",
        ]

        logging.getLogger("storefront_test_logging.orders").info("order placed")
        for handler in logger.handlers:
            handler.flush()
        assert "[INFO] storefront_test_logging.orders: order placed" in log_path.read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()


def test_unknown_level_falls_back_to_info(monkeypatch):
    monkeypatch.setattr(settings, "log_level", "chatty")
    monkeypatch.setattr(settings, "log_file", "")
    logger = setup_logging("storefront_test_level")
    try:
        assert logger.level == logging.INFO
        assert [handler.get_name() for handler in logger.handlers] == ["storefront-console"]
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
