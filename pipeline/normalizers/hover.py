"""
Hover text (map tooltip) builder.
"""

import html
from typing import Iterable, Optional

from pipeline.utils.text import is_missing


def build_hover_text(title, fields: Iterable[tuple[str, Optional[object]]]) -> str:
    """Build the HTML tooltip fragment for a site.

    Starts with the bolded title, then adds "Label: value" for every field
    whose value is not empty, whitespace-only or "N/A". Parts are joined
    with ``<br>``; field order is preserved as given.

    Args:
        title: Site name shown in bold
        fields: Ordered (label, value) pairs

    Returns:
        HTML fragment string
    """
    parts = [f"<b>{_escape(title)}</b>"]

    for label, value in fields:
        if is_missing(value):
            continue
        parts.append(f"{label}: {_escape(value)}")

    return "<br>".join(parts)


def _escape(value) -> str:
    if value is None:
        return ""
    return html.escape(str(value).strip(), quote=False)
