import html
import json
import math
from typing import Any


def format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Cannot format non-finite float for SVG output")
    formatted = f"{value:.3f}"
    formatted = formatted.rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted


def escape_text(text: str) -> str:
    return html.escape(text, quote=False)


def escape_attr(text: str) -> str:
    return html.escape(text, quote=True)


def json_for_script(payload: Any) -> str:
    """Serialize ``payload`` so it is safe inside a ``<script>`` element."""

    rendered = json.dumps(payload, ensure_ascii=False, sort_keys=True)
    return rendered.replace("</", "<\\/")
