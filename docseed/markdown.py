"""Convert markdown into Google Docs batchUpdate requests.

The whole document is inserted with a single ``insertText`` request; styling
follows as ``updateParagraphStyle`` / ``updateTextStyle`` requests against the
inserted ranges, and list bullets come last, from the bottom of the document
upwards, because ``createParagraphBullets`` strips the leading tabs used for
nesting and shifts everything after the list.

Indexes are UTF-16 code units, as the Docs API counts them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .types import ContentMutationBatch

CODE_FONT = "Courier New"
BULLET_PRESET = "BULLET_DISC_CIRCLE_SQUARE"
NUMBERED_PRESET = "NUMBERED_DECIMAL_ALPHA_ROMAN"

CODE_STYLE: Dict[str, Any] = {"weightedFontFamily": {"fontFamily": CODE_FONT}}

_md = MarkdownIt("commonmark", {"html": False}).enable(["strikethrough", "table"])

# inline open tokens and the text style they switch on
_INLINE_STYLES = {
    "strong_open": ({"bold": True}, "bold"),
    "em_open": ({"italic": True}, "italic"),
    "s_open": ({"strikethrough": True}, "strikethrough"),
}
_INLINE_CLOSERS = {"strong_close", "em_close", "s_close", "link_close"}


@dataclass
class InsertResult:
    paragraphs: int = 0
    headings: int = 0
    list_items: int = 0
    code_blocks: int = 0
    links: int = 0
    styled_spans: int = 0
    title_promoted: bool = False
    requests: int = 0
    warnings: List[str] = field(default_factory=list)


class MarkdownInserter(Protocol):
    def __call__(
        self,
        docs: Any,
        document_id: str,
        markdown: str,
        *,
        start_index: int = 1,
        first_heading_as_title: bool = False,
    ) -> InsertResult:
        ...


Span = Tuple[int, int, Dict[str, Any], str]


class _Builder:
    def __init__(self, result: InsertResult, first_heading_as_title: bool) -> None:
        self.result = result
        self.parts: List[str] = []
        self.length = 0
        self.paragraph_styles: List[Tuple[int, int, str]] = []
        self.text_styles: List[Span] = []
        self.lists: List[Tuple[int, int, bool]] = []
        self._promote_title = first_heading_as_title
        self._warned: set[str] = set()
        self._list_stack: List[bool] = []
        self._list_range: Optional[Tuple[int, int]] = None
        self._item_pending = False
        self._row: Optional[List[str]] = None

    def warn(self, message: str) -> None:
        if message not in self._warned:
            self._warned.add(message)
            self.result.warnings.append(message)

    def _append(self, text: str) -> None:
        self.parts.append(text)
        self.length += len(text)

    def _open_paragraph(self) -> int:
        if self.parts:
            self._append("\n")
        return self.length

    def paragraph(self, children: Sequence[Token], prefix: str = "") -> Tuple[int, int]:
        start = self._open_paragraph()
        self._append(prefix)
        base = self.length
        plain, spans = self._inline(children)
        self._append(plain)
        for span_start, span_end, style, fields in spans:
            self.text_styles.append((base + span_start, base + span_end, style, fields))
        return start, self.length

    def raw_paragraph(self, text: str) -> Tuple[int, int]:
        start = self._open_paragraph()
        self._append(text)
        return start, self.length

    def heading(self, level: int, children: Sequence[Token]) -> None:
        start, end = self.paragraph(children)
        if level == 1 and self._promote_title:
            self._promote_title = False
            self.result.title_promoted = True
            named = "TITLE"
        else:
            named = f"HEADING_{level}"
        self.paragraph_styles.append((start, end, named))
        self.result.headings += 1

    def body_paragraph(self, children: Sequence[Token]) -> None:
        if not self._list_stack:
            self.paragraph(children)
            self.result.paragraphs += 1
            return
        start, end = self.paragraph(children, prefix="\t" * (len(self._list_stack) - 1))
        if self._item_pending:
            self._item_pending = False
            self.result.list_items += 1
        first = self._list_range[0] if self._list_range else start
        self._list_range = (first, end)

    def code_block(self, content: str) -> None:
        lines = content[:-1].split("\n") if content.endswith("\n") else content.split("\n")
        start: Optional[int] = None
        end = 0
        for line in lines:
            line_start, end = self.raw_paragraph(line)
            if start is None:
                start = line_start
        if start is not None and end > start:
            self.text_styles.append((start, end, CODE_STYLE, "weightedFontFamily"))
        self.result.code_blocks += 1

    def open_list(self, ordered: bool) -> None:
        if not self._list_stack:
            self._list_range = None
        self._list_stack.append(ordered)

    def close_list(self) -> None:
        ordered = self._list_stack.pop()
        # items without text produce no paragraph, so a list can end up empty
        if not self._list_stack and self._list_range is not None:
            self.lists.append((self._list_range[0], self._list_range[1], ordered))
            self._list_range = None
        if not self._list_stack:
            self._item_pending = False

    def _inline(self, children: Sequence[Token]) -> Tuple[str, List[Span]]:
        out: List[str] = []
        spans: List[Span] = []
        open_styles: List[Tuple[int, Dict[str, Any], str]] = []
        offset = 0
        for token in children:
            kind = token.type
            if kind in ("text", "text_special", "html_inline"):
                piece = token.content
            elif kind in ("softbreak", "hardbreak"):
                piece = " "
            elif kind == "code_inline":
                piece = token.content
                spans.append((offset, offset + len(piece), CODE_STYLE, "weightedFontFamily"))
            elif kind == "image":
                piece = token.content or "image"
                self.warn(f"Images are not supported; inserted alt text for {token.attrGet('src')}")
            elif kind == "link_open":
                open_styles.append((offset, {"link": {"url": token.attrGet("href")}}, "link"))
                self.result.links += 1
                continue
            elif kind in _INLINE_STYLES:
                style, fields = _INLINE_STYLES[kind]
                open_styles.append((offset, style, fields))
                continue
            elif kind in _INLINE_CLOSERS:
                if open_styles:
                    span_start, style, fields = open_styles.pop()
                    spans.append((span_start, offset, style, fields))
                continue
            else:
                continue
            out.append(piece)
            offset += len(piece)
        return "".join(out), spans

    def walk(self, tokens: List[Token]) -> None:
        i = 0
        while i < len(tokens):
            token = tokens[i]
            kind = token.type
            if kind == "heading_open":
                self.heading(int(token.tag[1:]), tokens[i + 1].children or [])
                i += 3
                continue
            if kind == "paragraph_open":
                self.body_paragraph(tokens[i + 1].children or [])
                i += 3
                continue
            if kind in ("bullet_list_open", "ordered_list_open"):
                self.open_list(kind == "ordered_list_open")
            elif kind in ("bullet_list_close", "ordered_list_close"):
                self.close_list()
            elif kind == "list_item_open":
                self._item_pending = True
            elif kind in ("fence", "code_block"):
                self.code_block(token.content)
            elif kind == "blockquote_open":
                self.warn("Block quotes are not supported; inserted as plain paragraphs")
            elif kind == "hr":
                self.warn("Horizontal rules are not supported and were skipped")
            elif kind == "table_open":
                self.warn("Tables are not supported; inserted rows as plain text")
            elif kind == "tr_open":
                self._row = []
            elif kind == "inline" and self._row is not None:
                self._row.append(self._inline(token.children or [])[0])
            elif kind == "tr_close" and self._row is not None:
                self.raw_paragraph(" | ".join(self._row))
                self.result.paragraphs += 1
                self._row = None
            i += 1

    def text(self) -> str:
        return "".join(self.parts)


def _parse(markdown: str, builder: _Builder) -> None:
    builder.walk(_md.parse(markdown))


def _utf16_offsets(text: str) -> List[int]:
    offsets = [0]
    for ch in text:
        offsets.append(offsets[-1] + (2 if ord(ch) > 0xFFFF else 1))
    return offsets



def translate_markdown(
    markdown: str,
    start_index: int = 1,
    first_heading_as_title: bool = False,
) -> Tuple[ContentMutationBatch, InsertResult]:
    """Turn markdown into an ordered batch of Docs requests plus a summary.

    Nothing is sent anywhere; see :func:`insert_markdown` for that.
    """
    result = InsertResult()
    builder = _Builder(result, first_heading_as_title)
    _parse(markdown, builder)
    text = builder.text()
    if not text:
        return [], result

    offsets = _utf16_offsets(text)

    def doc_range(start: int, end: int) -> Dict[str, int]:
        return {"startIndex": start_index + offsets[start], "endIndex": start_index + offsets[end]}

    batch: ContentMutationBatch = [{"insertText": {"location": {"index": start_index}, "text": text}}]
    for start, end, named in builder.paragraph_styles:
        # Empty headings still need a non-empty range to pick up the style.
        end = max(end, min(start + 1, len(text)))
        if end <= start:
            continue
        batch.append(
            {
                "updateParagraphStyle": {
                    "range": doc_range(start, end),
                    "paragraphStyle": {"namedStyleType": named},
                    "fields": "namedStyleType",
                }
            }
        )
    for start, end, style, fields in builder.text_styles:
        if end <= start:
            continue
        batch.append({"updateTextStyle": {"range": doc_range(start, end), "textStyle": style, "fields": fields}})
        result.styled_spans += 1
    for start, end, ordered in reversed(builder.lists):
        if end <= start:
            continue
        batch.append(
            {
                "createParagraphBullets": {
                    "range": doc_range(start, end),
                    "bulletPreset": NUMBERED_PRESET if ordered else BULLET_PRESET,
                }
            }
        )
    result.requests = len(batch)
    return batch, result


def insert_markdown(
    docs: Any,
    document_id: str,
    markdown: str,
    *,
    start_index: int = 1,
    first_heading_as_title: bool = False,
) -> InsertResult:
    batch, result = translate_markdown(markdown, start_index=start_index, first_heading_as_title=first_heading_as_title)
    if batch:
        docs.batch_update(document_id, batch)
    return result


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def format_insert_result(result: InsertResult) -> str:
    parts = [
        _plural(result.headings, "heading"),
        _plural(result.paragraphs, "paragraph"),
        _plural(result.list_items, "list item"),
    ]
    if result.code_blocks:
        parts.append(_plural(result.code_blocks, "code block"))
    if result.links:
        parts.append(_plural(result.links, "link"))
    summary = f"Inserted markdown: {', '.join(parts)}"
    if result.title_promoted:
        summary += " (first heading used as title)"
    if result.warnings:
        summary += f"; {_plural(len(result.warnings), 'warning')}: " + "; ".join(result.warnings)
    return summary
