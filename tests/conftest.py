from __future__ import annotations

import json
import os
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from docseed.logger import Logger
from docseed.tools import discover_tools
from docseed.types import ToolHandler


@pytest.fixture()
def sandbox(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    root_cwd = Path.cwd()
    original_env = dict(os.environ)
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(root_cwd)
        shutil.rmtree(tmp_path, ignore_errors=True)
        os.environ.clear()
        os.environ.update(original_env)


@pytest.fixture(scope="session")
def tool_handlers() -> Dict[str, ToolHandler]:
    _, handlers = discover_tools()
    return handlers


class FakeDrive:
    """In-memory stand-in for DriveClient.create_file."""

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def create_file(self, metadata: Dict[str, Any], fields: str = "", supports_all_drives: bool = False) -> Dict[str, Any]:
        self.calls.append({"metadata": metadata, "fields": fields, "supports_all_drives": supports_all_drives})
        if self.error is not None:
            raise self.error
        doc_id = f"doc-{len(self.calls)}"
        return {
            "id": doc_id,
            "name": metadata["name"],
            "webViewLink": f"https://docs.google.com/document/d/{doc_id}/edit",
        }


class FakeDocs:
    """In-memory stand-in for DocsClient.batch_update."""

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def batch_update(self, document_id: str, requests_: List[Dict[str, Any]]) -> Dict[str, Any]:
        self.calls.append({"document_id": document_id, "requests": requests_})
        if self.error is not None:
            raise self.error
        return {"documentId": document_id, "replies": [{} for _ in requests_]}


@pytest.fixture()
def drive() -> FakeDrive:
    return FakeDrive()


@pytest.fixture()
def docs() -> FakeDocs:
    return FakeDocs()


@pytest.fixture()
def log_file(sandbox: Path) -> Path:
    return sandbox / "log.jsonl"


@pytest.fixture()
def logger(log_file: Path) -> Logger:
    return Logger(log_json_path=str(log_file), enable_human_logs=False, enable_file_logs=True)


def read_diagnostics(log_file: Path) -> List[Dict[str, Any]]:
    if not log_file.exists():
        return []
    return [json.loads(line) for line in log_file.read_text(encoding="utf8").splitlines() if line.strip()]
