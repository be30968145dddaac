# core/render.py
import html
import re
from typing import List

_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")


def process_text(text: str) -> str:
    """
    Converts the model's lightweight markup to HTML: **x** -> <strong>x</strong>,
    newlines -> <br>. Everything else passes through literally.

    The output is inserted as trusted markup, so only feed it model text shown
    back to the same user who uploaded the image.
    """
    if not text:
        return ""
    return _BOLD_RE.sub(r"<strong>\1</strong>", text).replace("\n", "<br>")


def unhealthy_list_html(found: List[str]) -> str:
    items = "".join(f"<li>{html.escape(item)}</li>" for item in found)
    return f'<ul class="unhealthy-list">{items}</ul>'
