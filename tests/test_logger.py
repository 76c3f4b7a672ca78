"""Tests for logger module."""

from __future__ import annotations

import json
from pathlib import Path


def test_logger_human_entry():
    from docseed.logger import HumanEntry, Logger

    logger = Logger(enable_human_logs=False, enable_file_logs=False)

    # Should not raise even with logs disabled
    logger.human(HumanEntry(title="test", body="content", variant="tool"))


def test_logger_json_entry(sandbox: Path):
    from docseed.logger import Logger

    log_file = sandbox / "log.json"
    logger = Logger(log_json_path=str(log_file), enable_human_logs=False, enable_file_logs=True)

    logger.json({"type": "test", "data": "value"})

    record = json.loads(log_file.read_text())
    assert record["type"] == "test"
    assert "timestamp" in record


def test_logger_default_path(sandbox: Path):
    from docseed.logger import Logger

    logger = Logger(enable_human_logs=False)
    logger.json({"type": "x"})

    assert (sandbox / ".docseed-log.jsonl").exists()


def test_logger_levels(sandbox: Path):
    from docseed.logger import Logger

    log_file = sandbox / "levels.jsonl"
    logger = Logger(log_json_path=str(log_file), enable_human_logs=False)

    logger.info("started", title="Doc")
    logger.warn("careful", document_id="d1")
    logger.error("failed")

    records = [json.loads(line) for line in log_file.read_text().splitlines()]
    assert [r["level"] for r in records] == ["info", "warn", "error"]
    assert records[0]["title"] == "Doc"
    assert records[1]["document_id"] == "d1"
    assert all(r["type"] == "diagnostic" for r in records)


def test_logger_pretty_writes_to_stderr(sandbox: Path, capsys):
    from docseed.logger import Logger

    logger = Logger(enable_human_logs=True, enable_file_logs=False, pretty=True)
    logger.warn("content skipped")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "content skipped" in captured.err


def test_logger_plain_writes_to_stderr(sandbox: Path, capsys):
    from docseed.logger import HumanEntry, Logger

    logger = Logger(enable_human_logs=True, enable_file_logs=False, pretty=False)
    logger.human(HumanEntry(title="hello", body="world"))

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "hello: world" in captured.err


def test_logger_from_env(sandbox: Path, monkeypatch):
    from docseed.logger import logger_from_env

    monkeypatch.setenv("DOCSEED_QUIET", "1")
    monkeypatch.setenv("DOCSEED_LOG_JSON", str(sandbox / "env.jsonl"))
    monkeypatch.delenv("DOCSEED_NO_LOG_JSON", raising=False)

    logger = logger_from_env()

    assert logger.enable_human_logs is False
    assert logger.enable_file_logs is True
    assert logger.log_path == sandbox / "env.jsonl"
