"""Helpers for the URL-safe base64 and RFC 2047 encodings Gmail uses."""

from __future__ import annotations

import base64
import binascii
import re
from email.charset import QP, Charset
from email.errors import HeaderParseError
from email.header import Header, decode_header
from typing import List

_B64URL_RE = re.compile(rb"[A-Za-z0-9_-]*={0,2}")


def b64url_decode(data: str | bytes | None) -> bytes:
    """
    Decode the URL-safe base64 blobs Gmail returns (without guaranteed padding).
    Undecodable input yields b"" so callers can treat it as missing content.
    """
    if not data:
        return b""
    if isinstance(data, str):
        try:
            raw = data.encode("ascii")
        except UnicodeEncodeError:
            return b""
    else:
        raw = data
    if not _B64URL_RE.fullmatch(raw):
        return b""
    raw = raw.rstrip(b"=")
    padding = (-len(raw)) % 4
    if padding:
        raw += b"=" * padding
    try:
        return base64.urlsafe_b64decode(raw)
    except (binascii.Error, ValueError):
        return b""


def b64url_encode(data: str | bytes) -> str:
    """
    Encode text or bytes as padded URL-safe base64 with no line wrapping.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.urlsafe_b64encode(data).decode("ascii")


def decode_header_str(value: str | bytes | None) -> str:
    """
    Decode RFC 2047 encoded words into a single Unicode string.
    """
    if value is None:
        return ""
    if isinstance(value, bytes):
        value = value.decode("utf-8", "replace")
    try:
        parts = decode_header(value)
    except (HeaderParseError, ValueError):
        return value

    out: List[str] = []
    for text, charset in parts:
        if isinstance(text, bytes):
            enc = charset or "utf-8"
            try:
                out.append(text.decode(enc, "replace"))
            except LookupError:
                out.append(text.decode("utf-8", "replace"))
        else:
            out.append(text)
    return "".join(out)


def encode_header_str(value: str) -> str:
    """
    Encode a header value as RFC 2047 Q-encoded words when it is not plain ASCII.
    """
    if value.isascii():
        return value
    charset = Charset("utf-8")
    charset.header_encoding = QP
    return Header(value, charset).encode(maxlinelen=10_000, linesep="\r\n")


__all__ = ["b64url_decode", "b64url_encode", "decode_header_str", "encode_header_str"]
