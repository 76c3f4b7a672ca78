"""Typed structures used across docseed."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Literal, Optional, TypedDict

ContentFormat = Literal["markdown", "raw"]
CONTENT_FORMATS = ("markdown", "raw")
DOCUMENT_MIME_TYPE = "application/vnd.google-apps.document"

ContentMutationBatch = List[Dict[str, Any]]


class ToolDefinition(TypedDict):
    name: str
    description: str
    parameters: Dict[str, Any]


class ToolResult(TypedDict, total=False):
    id: str
    output: str
    error: bool


ToolHandler = Callable[[Dict[str, Any]], ToolResult]


@dataclass
class CreationRequest:
    title: str
    parent_folder_id: Optional[str] = None
    initial_content: Optional[str] = None
    content_format: ContentFormat = "markdown"

    @classmethod
    def from_args(cls, args: Dict[str, Any]) -> "CreationRequest":
        title = args.get("title")
        if not isinstance(title, str) or not title:
            raise ValueError("'title' must be a non-empty string")
        parent = args.get("parentFolderId")
        if parent is not None and not isinstance(parent, str):
            raise ValueError("'parentFolderId' must be a string")
        content = args.get("initialContent")
        if content is not None and not isinstance(content, str):
            raise ValueError("'initialContent' must be a string")
        content_format = args.get("contentFormat") or "markdown"
        if content_format not in CONTENT_FORMATS:
            raise ValueError("'contentFormat' must be one of: markdown, raw")
        return cls(
            title=title,
            parent_folder_id=parent or None,
            initial_content=content,
            content_format=content_format,
        )


@dataclass
class CreatedDocument:
    id: str
    name: str
    url: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
