"""Convert HTML message bodies into readable plain text.

This is a small regex scanner, not an HTML parser: it keeps paragraph and
line structure, drops markup, and decodes the character references that show
up in real-world mail.
"""

from __future__ import annotations

import re
from typing import Dict

_STYLE_RE = re.compile(r"<style[^>]*>.*?</style>", re.I | re.S)
_SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script>", re.I | re.S)
_BR_RE = re.compile(r"<br\s*/?>", re.I | re.A)
_BLOCK_RE = re.compile(r"</?(?:p|div|h[1-6]|li|tr|blockquote)\b[^>]*>", re.I | re.A)
_TAG_RE = re.compile(r"<[^>]+>")
_ENTITY_RE = re.compile(r"&[a-zA-Z]+;|&#[0-9]+;|&#[xX][0-9a-fA-F]+;")
_SPACE_RE = re.compile(r"[ \t]+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")

ENTITIES: Dict[str, str] = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&apos;": "'",
    "&nbsp;": " ",
    "&mdash;": "—",
    "&ndash;": "–",
    "&hellip;": "…",
    "&laquo;": "«",
    "&raquo;": "»",
    "&copy;": "©",
    "&reg;": "®",
    "&trade;": "™",
}

# Numeric references must fit a signed 32-bit int to be decoded at all.
_MAX_REFERENCE = 0x7FFFFFFF
_MAX_DIGITS = {10: 10, 16: 8}


def html_to_text(html: str) -> str:
    """
    Turn an HTML fragment into plain text.

    Style and script blocks vanish with their content, <br> and block-level
    tags become line breaks, every other tag is dropped, character references
    are decoded, and whitespace is tidied so at most one blank line separates
    paragraphs.
    """
    if not html:
        return ""

    text = _STYLE_RE.sub("", html)
    text = _SCRIPT_RE.sub("", text)
    text = _BR_RE.sub("\n", text)
    text = _BLOCK_RE.sub("\n", text)
    text = _TAG_RE.sub("", text)
    text = decode_entities(text)

    lines = [_SPACE_RE.sub(" ", line.strip()) for line in text.split("\n")]
    text = _BLANK_LINES_RE.sub("\n\n", "\n".join(lines))
    return text.strip()


def decode_entities(text: str) -> str:
    """
    Replace named (&amp;) and numeric (&#38;, &#x26;) character references.
    Unknown names and unusable numbers are left exactly as written.
    """
    return _ENTITY_RE.sub(_replace_entity, text)


def _replace_entity(match: re.Match) -> str:
    entity = match.group(0)
    named = ENTITIES.get(entity.lower())
    if named is not None:
        return named
    if not entity.startswith("&#"):
        return entity

    digits = entity[2:-1]
    base = 10
    if digits[:1] in ("x", "X"):
        digits, base = digits[1:], 16
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS[base]:
        return entity
    code = int(digits, base)
    if code <= 0 or code > _MAX_REFERENCE:
        return entity
    if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
        return "\ufffd"
    return chr(code)


__all__ = ["ENTITIES", "decode_entities", "html_to_text"]
