import logging
import os

from ddlbridge.config import config
from ddlbridge.utils.logger import setup_logger


class TestSetupLogger:
    def test_file_handler_is_attached_once(self) -> None:
        setup_logger("first")
        setup_logger("second")
        expected = os.path.abspath(os.path.join(config["base_dirs"]["logs"], "ddlbridge.log"))
        handlers = [h for h in logging.getLogger().handlers if getattr(h, "baseFilename", None) == expected]
        assert len(handlers) == 1

    def test_per_logger_override(self) -> None:
        assert setup_logger("api_routes").level == logging.INFO
        assert setup_logger("SchemaTranslator").level == logging.DEBUG

    def test_framework_records_stay_out_of_file(self) -> None:
        setup_logger("any")
        expected = os.path.abspath(os.path.join(config["base_dirs"]["logs"], "ddlbridge.log"))
        handler = next(h for h in logging.getLogger().handlers if getattr(h, "baseFilename", None) == expected)
        record = logging.LogRecord("uvicorn.access", logging.INFO, __file__, 1, "GET /", None, None)
        assert not handler.filter(record)
