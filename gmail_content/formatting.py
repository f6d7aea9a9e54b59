"""Human-readable text renderings of parsed messages for tool responses."""

from __future__ import annotations

from typing import Iterable, List

from .types import MessageDetail, MessageSummary

_UNITS = "KMGTPE"


def format_byte_size(size: int | None) -> str:
    """
    Render a byte count as "512 B", "1.5 KB", "2.0 MB"... (1024 based).
    """
    if not size:
        return "unknown size"
    if size < 1024:
        return f"{size} B"
    div, exp = 1024, 0
    n = size // 1024
    while n >= 1024:
        div *= 1024
        exp += 1
        n //= 1024
    return f"{size / div:.1f} {_UNITS[exp]}B"


def is_office_type(mime_type: str) -> bool:
    """True for Office Open XML documents (.docx/.xlsx/.pptx)."""
    return (
        "officedocument" in mime_type
        or mime_type.endswith(".docx")
        or mime_type.endswith(".xlsx")
        or mime_type.endswith(".pptx")
    )


def format_message_detail(detail: MessageDetail) -> str:
    lines: List[str] = ["=== Gmail Message ===", f"Subject: {detail.subject}", f"From: {detail.from_}", f"To: {detail.to}"]
    if detail.cc:
        lines.append(f"CC: {detail.cc}")
    lines.append(f"Date: {detail.date}")
    lines.append(f"Message ID: {detail.id}")
    if detail.message_id_header:
        lines.append(f"Message-ID Header: {detail.message_id_header}")
    if detail.attachments:
        lines += ["", "--- Attachments ---"]
        for a in detail.attachments:
            lines.append(f"• {a.filename} ({a.mime_type}, {format_byte_size(a.size)})")
            lines.append(f"    Attachment ID: {a.attachment_id}")
    lines += ["", "--- Body ---", detail.body]
    return "\n".join(lines)


def format_search_results(query: str, summaries: Iterable[MessageSummary], next_page_token: str = "") -> str:
    summaries = list(summaries)
    lines: List[str] = ["=== Gmail Search Results ===", f"Query: {query}", f"Results: {len(summaries)}"]
    if next_page_token:
        lines.append(f"Next page token: {next_page_token}")
    lines.append("")
    for s in summaries:
        lines.append(f"• Subject: {s.subject}")
        lines.append(f"    From: {s.from_} | Date: {s.date}")
        lines.append(f"    ID: {s.id} (Thread: {s.thread_id})")
    return "\n".join(lines)


__all__ = ["format_byte_size", "format_message_detail", "format_search_results", "is_office_type"]
