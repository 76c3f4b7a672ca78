"""Human and JSON logging helpers."""
from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from os import getenv
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.theme import Theme

from .config import DEFAULT_LOG_JSON_PATH, ensure_dotenv_loaded, env_flag


@dataclass
class HumanEntry:
    title: Optional[str] = None
    body: Optional[str] = None
    variant: str = "info"


class Logger:
    def __init__(
        self,
        log_json_path: Optional[str] = None,
        enable_human_logs: bool = True,
        enable_file_logs: bool = True,
        pretty: bool = True,
    ) -> None:
        self.log_path = Path(log_json_path or DEFAULT_LOG_JSON_PATH)
        self.enable_human_logs = enable_human_logs
        self.enable_file_logs = enable_file_logs
        self.pretty = pretty
        # stdout carries tool output and the MCP stream
        self.console = Console(theme=_theme(), highlight=False, stderr=True) if pretty else None

    def human(self, entry: HumanEntry) -> None:
        if not self.enable_human_logs:
            return
        title = entry.title or "info"
        body = entry.body or ""
        variant = entry.variant or "info"
        if self.console:
            style = {
                "error": "red",
                "warn": "yellow",
                "tool": "green",
            }.get(variant, "cyan")
            prefix = {
                "error": "[error]",
                "warn": "[warn]",
                "tool": "[tool]",
            }.get(variant, "[info]")
            self.console.print(f"{prefix} {title}", markup=False)
            if body:
                self.console.print(body, style=style, markup=False)
            return
        print(f"{title}: {body}", file=sys.stderr)

    def json(self, entry: Dict[str, Any]) -> None:
        if not self.enable_file_logs:
            return
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **entry,
        }
        try:
            with self.log_path.open("a", encoding="utf8") as fh:
                fh.write(json.dumps(payload))
                fh.write("\n")
        except OSError:
            if self.console:
                self.console.print("log write failed", style="red")

    def diagnostic(self, level: str, message: str, **extra: Any) -> None:
        self.human(HumanEntry(title=message, variant=level))
        self.json({"type": "diagnostic", "level": level, "message": message, **extra})

    def info(self, message: str, **extra: Any) -> None:
        self.diagnostic("info", message, **extra)

    def warn(self, message: str, **extra: Any) -> None:
        self.diagnostic("warn", message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        self.diagnostic("error", message, **extra)


def _theme() -> Theme:
    return Theme(
        {
            "info": "cyan",
            "warn": "yellow",
            "error": "red",
            "tool": "green",
        }
    )


def logger_from_env() -> Logger:
    """Build the logger used by tool handlers from DOCSEED_* settings."""
    ensure_dotenv_loaded()
    return Logger(
        log_json_path=getenv("DOCSEED_LOG_JSON"),
        enable_human_logs=not env_flag("DOCSEED_QUIET"),
        enable_file_logs=not env_flag("DOCSEED_NO_LOG_JSON"),
        pretty=not env_flag("DOCSEED_PLAIN_LOGS"),
    )
