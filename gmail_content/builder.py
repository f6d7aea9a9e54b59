"""Serialize outgoing plain-text messages for users.messages.send / drafts.create."""

from __future__ import annotations

from typing import List

from .decoder import b64url_encode, encode_header_str

CRLF = "\r\n"


def build_raw_message(
    to: str,
    subject: str,
    body: str,
    cc: str = "",
    bcc: str = "",
    thread_id: str = "",
    in_reply_to: str = "",
    references: str = "",
) -> str:
    """
    Build an RFC 2822 message and return it URL-safe base64 encoded, ready for
    the `raw` field of a Gmail API request.

    Empty optional headers are left out. The body is written as-is, so it must
    not carry header lines of its own. `thread_id` is not a header: pass it as
    `threadId` next to `raw` so Gmail files the message into that thread.
    """
    lines: List[str] = [f"To: {to}"]
    if cc:
        lines.append(f"Cc: {cc}")
    if bcc:
        lines.append(f"Bcc: {bcc}")
    lines.append(f"Subject: {encode_header_str(subject)}")
    if in_reply_to:
        lines.append(f"In-Reply-To: {in_reply_to}")
    if references:
        lines.append(f"References: {references}")
    lines.append("MIME-Version: 1.0")
    lines.append('Content-Type: text/plain; charset="UTF-8"')

    message = CRLF.join(lines) + CRLF + CRLF + body
    return b64url_encode(message)


__all__ = ["build_raw_message"]
