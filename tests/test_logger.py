"""日志配置测试。"""

import json
import logging
from typing import Generator

import pytest

from cland_share.core.config import get_settings
from cland_share.core.logger import (
    ColorFormatter,
    JsonFormatter,
    RequestIdFilter,
    build_logging_config,
    set_request_id,
    setup_logging,
)


@pytest.fixture()
def restore_logging() -> Generator[None, None, None]:
    """``dictConfig`` 会修改全局状态，用例结束后还原根日志器与包日志器。"""
    root = logging.getLogger()
    package_logger = logging.getLogger("cland_share")
    saved = (list(root.handlers), root.level, list(package_logger.handlers), package_logger.level, package_logger.propagate)
    yield
    for handler in package_logger.handlers + root.handlers:
        if handler not in saved[0]:
            handler.close()
    root.handlers[:] = saved[0]
    root.setLevel(saved[1])
    package_logger.handlers[:] = saved[2]
    package_logger.setLevel(saved[3])
    package_logger.propagate = saved[4]


def _record(msg: str = "hello", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord("cland_share.test", level, __file__, 1, msg, None, None)


def test_request_id_filter_injects_context_value():
    record = _record()
    set_request_id("rid-1")
    try:
        assert RequestIdFilter().filter(record) is True
    finally:
        set_request_id(None)
    assert record.request_id == "rid-1"


def test_json_formatter_outputs_structured_payload():
    record = _record("code rejected")
    record.request_id = "rid-2"
    record.response_code = 40010010001
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "code rejected"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "cland_share.test"
    assert payload["request_id"] == "rid-2"
    assert payload["code"] == 40010010001
    assert "ts" in payload


def test_color_formatter_wraps_message_when_enabled():
    formatter = ColorFormatter("%(levelname)s %(message)s", use_colors=True)
    rendered = formatter.format(_record("warn", logging.WARNING))
    assert rendered.startswith(ColorFormatter.COLORS[logging.WARNING])
    assert rendered.endswith(ColorFormatter.RESET)

    plain = ColorFormatter("%(levelname)s %(message)s", use_colors=False)
    assert plain.format(_record("warn", logging.WARNING)) == "WARNING warn"


def test_build_logging_config_respects_settings(monkeypatch):
    monkeypatch.setenv("LOG_JSON", "true")
    monkeypatch.setenv("LOG_TO_FILE", "false")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    get_settings.cache_clear()

    config = build_logging_config()
    assert set(config["handlers"]) == {"default"}
    assert config["handlers"]["default"]["formatter"] == "json"
    assert config["loggers"]["cland_share"]["level"] == "DEBUG"


def test_setup_logging_writes_to_file(restore_logging):
    setup_logging()
    settings = get_settings()
    assert settings.log_directory.is_dir()

    logging.getLogger("cland_share").warning("written to file")
    for handler in logging.getLogger("cland_share").handlers:
        handler.flush()

    content = settings.log_file_path.read_text(encoding="utf-8")
    assert "written to file" in content
    assert "WARNING" in content
