import logging

from app.logging.logger import Log


class TestLog:
    def test_configure_sets_level_and_single_handler(self) -> None:
        Log.configure("debug")
        Log.configure("info")
        logger = logging.getLogger("klarbrief")
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1

    def test_configure_quiets_library_loggers(self) -> None:
        Log.configure("debug")
        assert logging.getLogger("pdfminer").level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING
