"""Deterministic sanitizers used before persistence and rendering."""

from __future__ import annotations

import html
import re

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")


def sanitize_text(value: str | None, max_len: int = 20000) -> str:
    """Sanitize free-form content before persistence/display."""
    if value is None:
        return ""
    cleaned = str(value).replace("\x00", "").strip()
    cleaned = cleaned[:max_len]
    return cleaned


def escape_markup(value: str | None, max_len: int = 20000) -> str:
    """Escape text before handing it to a markup-aware renderer."""
    return html.escape(sanitize_text(value, max_len=max_len), quote=False)


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value.strip()))
