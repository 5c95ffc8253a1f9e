# =============================================================================
# lib/list_content.py - List-Content Codec
# =============================================================================
# Long free-text fields (consultation content, special notes) are stored as a
# run of list-item tags: "<li>first line</li><li>second line</li>".
#
# Three directions:
# - to_storage:        plain textarea text -> tagged string (write time)
# - to_editable_text:  tagged string -> plain text (edit-open time)
# - to_display_lines:  tagged string -> DisplayLine list (display time)
#
# All functions are pure and never raise on str/None input.
# =============================================================================

from __future__ import annotations

import re
from dataclasses import dataclass

OPEN_TAG = "<li>"
CLOSE_TAG = "</li>"
QUOTE_PREFIX = ">"

_ANY_TAG = re.compile(r"</?li>", re.IGNORECASE)
# Repeated tags left behind by earlier edits of already-tagged content
_REPEATED_OPEN = re.compile(r"(?:<li>){2,3}", re.IGNORECASE)
_REPEATED_CLOSE = re.compile(r"(?:</li>){2,3}", re.IGNORECASE)
_OPEN = re.compile(r"<li>", re.IGNORECASE)
_CLOSE = re.compile(r"</li>", re.IGNORECASE)


@dataclass(frozen=True)
class DisplayLine:
    """One rendered line of list content."""
    text: str
    is_quoted: bool = False

    def to_dict(self) -> dict:
        return {"text": self.text, "is_quoted": self.is_quoted}


def is_tagged(text: str | None) -> bool:
    """True when the text contains at least one opening or closing list tag."""
    return bool(text) and _ANY_TAG.search(text) is not None


def _wrap(fragments: list[str]) -> str:
    return "".join(f"{OPEN_TAG}{fragment}{CLOSE_TAG}" for fragment in fragments)


def _clean(fragments: list[str]) -> list[str]:
    return [fragment.strip() for fragment in fragments if fragment.strip()]


def to_storage(text: str | None) -> str:
    """
    Convert textarea text to the tagged storage form.

    Already-tagged input is repaired rather than double-wrapped: runs of 2-3
    identical tags collapse to one, then every fragment between tags is
    trimmed and re-wrapped exactly once.

    Examples:
        to_storage("a\\nb\\n\\nc")           -> "<li>a</li><li>b</li><li>c</li>"
        to_storage("<li><li>x</li></li>")   -> "<li>x</li>"
    """
    if not text:
        return ""

    if is_tagged(text):
        repaired = _REPEATED_OPEN.sub(OPEN_TAG, text)
        repaired = _REPEATED_CLOSE.sub(CLOSE_TAG, repaired)
        return _wrap(_clean(_ANY_TAG.split(repaired)))

    return _wrap(_clean(text.split("\n")))


def _detag_lines(stored: str) -> list[str]:
    plain = _OPEN.sub("", stored)
    plain = _CLOSE.sub("\n", plain)
    return _clean(plain.split("\n"))


def to_editable_text(stored: str | None) -> str:
    """
    Convert stored content back to newline-separated text for editing.

    Untagged content (legacy rows written before the codec) is returned as-is.
    """
    if not stored:
        return ""
    if not is_tagged(stored):
        return stored
    return "\n".join(_detag_lines(stored))


def to_display_lines(stored: str | None) -> list[DisplayLine]:
    """
    Split stored content into display units.

    Lines whose trimmed text starts with ">" are flagged as quoted remarks.
    Untagged content is split on newlines the same way.
    """
    if not stored:
        return []

    lines = _detag_lines(stored) if is_tagged(stored) else _clean(stored.split("\n"))
    return [
        DisplayLine(text=line, is_quoted=line.startswith(QUOTE_PREFIX))
        for line in lines
    ]
