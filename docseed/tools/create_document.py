"""createDocument tool."""
from __future__ import annotations

import json
from typing import Dict

from ..clients import DocsClient, DriveClient
from ..logger import logger_from_env
from ..types import CreationRequest, ToolDefinition, ToolResult
from ..workflow import DocumentCreator

TOOL_DEFINITION: ToolDefinition = {
    "name": "createDocument",
    "description": "Creates a new empty Google Document. Optionally places it in a specific folder and adds initial text content.",
    "parameters": {
        "type": "object",
        "properties": {
            "title": {
                "type": "string",
                "minLength": 1,
                "description": "Title for the new document.",
            },
            "parentFolderId": {
                "type": "string",
                "description": "ID of folder where document should be created. If not provided, creates in Drive root.",
            },
            "initialContent": {
                "type": "string",
                "description": "Initial content to add to the document. By default, markdown syntax is converted to formatted Google Docs content (headings, bold, italic, links, lists, etc.).",
            },
            "contentFormat": {
                "type": "string",
                "enum": ["markdown", "raw"],
                "default": "markdown",
                "description": "How to interpret initialContent. 'markdown' (default) converts markdown to formatted Google Docs content. 'raw' inserts the text as-is without any conversion.",
            },
        },
        "required": ["title"],
    },
}


def build_creator() -> DocumentCreator:
    return DocumentCreator(drive=DriveClient(), docs=DocsClient(), logger=logger_from_env())


def tool_handler(args: Dict) -> ToolResult:
    request = CreationRequest.from_args(args)
    document = build_creator().create(request)
    return {"id": "createDocument", "output": json.dumps(document.to_dict(), indent=2)}
