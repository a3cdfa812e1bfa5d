import json
import logging

import pytest

from c2cs import logging as c2cs_logging
from tests.utils import config


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = c2cs_logging.get_logger()
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


def test_get_logger_namespace():
    assert c2cs_logging.get_logger().name == "c2cs"
    assert c2cs_logging.get_logger("bindgen").name == "c2cs.bindgen"
    assert c2cs_logging.get_logger("c2cs.csharp.mapper").name == "c2cs.csharp.mapper"
    assert c2cs_logging.get_logger("c2csx").name == "c2cs.c2csx"


def test_console_only_by_default(config):
    state = c2cs_logging.configure_logging(config)
    assert state.log_dir is None
    assert state.text_log_path is None
    assert len(c2cs_logging.get_logger().handlers) == 2


def test_errors_go_to_stderr_only(config, capsys):
    config["logging"]["color"] = False
    c2cs_logging.configure_logging(config)
    logger = c2cs_logging.get_logger("test")
    logger.warning("skipped Point")
    logger.error("could not write output")

    captured = capsys.readouterr()
    assert "skipped Point" in captured.out
    assert "could not write output" not in captured.out
    assert "could not write output" in captured.err


def test_level_override(config):
    state = c2cs_logging.configure_logging(config, console_level_override="warning")
    assert state.console_level == logging.WARNING
    assert c2cs_logging.get_logger().level == logging.WARNING


def test_unknown_level(config):
    with pytest.raises(ValueError):
        c2cs_logging.configure_logging(config, console_level_override="LOUD")


def test_reconfiguring_replaces_handlers(config):
    c2cs_logging.configure_logging(config)
    c2cs_logging.configure_logging(config)
    assert len(c2cs_logging.get_logger().handlers) == 2


def test_file_and_jsonl_logging(tmp_path, config):
    config["logging"].update({"jsonl": True, "filename_pattern": "run-{timestamp}.log"})
    state = c2cs_logging.configure_logging(config, log_dir_override=str(tmp_path))
    logger = c2cs_logging.get_logger("test")
    logger.debug("mapped %d declarations", 3)
    for handler in c2cs_logging.get_logger().handlers:
        handler.flush()

    assert state.log_dir == str(tmp_path)
    assert state.text_log_path.endswith(".log")
    assert state.jsonl_log_path.endswith(".jsonl")
    with open(state.text_log_path, encoding="utf-8") as f:
        assert "mapped 3 declarations" in f.read()
    with open(state.jsonl_log_path, encoding="utf-8") as f:
        record = json.loads(f.readline())
    assert record["message"] == "mapped 3 declarations"
    assert record["logger"] == "c2cs.test"
    assert record["level"] == "DEBUG"


def test_log_dir_from_config(tmp_path, config):
    config["logging"]["dir"] = str(tmp_path / "logs")
    state = c2cs_logging.configure_logging(config)
    assert state.text_log_path.startswith(str(tmp_path / "logs"))
    assert state.jsonl_log_path is None
