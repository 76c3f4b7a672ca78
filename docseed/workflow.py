"""Create a Google Doc and optionally seed it with content.

Creation and content injection go to two different services and are not
transactional. Only a creation failure reaches the caller; once the document
exists, a failed content insert is logged as a warning and the document is
returned as-is (possibly empty). Nothing is rolled back or retried, so
reissuing a request always creates a new document.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from .errors import error_message, map_creation_error
from .logger import Logger
from .markdown import MarkdownInserter, format_insert_result, insert_markdown
from .types import DOCUMENT_MIME_TYPE, CreatedDocument, CreationRequest

CREATE_FIELDS = "id,name,webViewLink"
CONTENT_START_INDEX = 1  # index 0 is the body's structural start


class DocumentCreator:
    def __init__(
        self,
        drive: Any,
        docs: Any,
        logger: Logger,
        markdown_inserter: Optional[MarkdownInserter] = None,
    ) -> None:
        self.drive = drive
        self.docs = docs
        self.logger = logger
        self.markdown_inserter = markdown_inserter or insert_markdown

    def create(self, request: CreationRequest) -> CreatedDocument:
        self.logger.info(f'Creating new document "{request.title}"', title=request.title)

        metadata: Dict[str, Any] = {"name": request.title, "mimeType": DOCUMENT_MIME_TYPE}
        if request.parent_folder_id:
            metadata["parents"] = [request.parent_folder_id]

        try:
            created = self.drive.create_file(metadata, fields=CREATE_FIELDS, supports_all_drives=True)
        except Exception as exc:
            self.logger.error(f"Error creating document: {error_message(exc)}", title=request.title)
            raise map_creation_error(exc) from exc

        document = CreatedDocument(
            id=created.get("id"),
            name=created.get("name") or request.title,
            url=created.get("webViewLink"),
        )

        if request.initial_content:
            try:
                self._seed_content(document, request)
            except Exception as exc:
                self.logger.warn(
                    f"Document created but failed to add initial content: {error_message(exc)}",
                    document_id=document.id,
                )
        return document

    def _seed_content(self, document: CreatedDocument, request: CreationRequest) -> None:
        if request.content_format == "raw":
            self.docs.batch_update(
                document.id,
                [{"insertText": {"location": {"index": CONTENT_START_INDEX}, "text": request.initial_content}}],
            )
            return
        result = self.markdown_inserter(
            self.docs,
            document.id,
            request.initial_content,
            start_index=CONTENT_START_INDEX,
            first_heading_as_title=True,
        )
        self.logger.info(format_insert_result(result), document_id=document.id)
