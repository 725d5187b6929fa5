"""Markup for a client-side Penrose diagram component."""

from __future__ import annotations

from .base import RenderRequest
from .utils import json_for_script

EMBED_TPL = (
    '<div class="euclid-diagram" data-renderer="penrose" data-max-opt-steps="%d">'
    '<script type="application/json">%s</script>'
    "</div>"
)


class PenroseEmbedRenderer:
    """Hand the three programs and entity labels to the browser-side engine.

    Layout happens in the client; this renderer only packages its inputs.
    """

    def render(self, request: RenderRequest) -> str:
        payload = {
            "dsl": request.domain,
            "sty": request.style,
            "sub": request.substance,
            "embeds": dict(request.labels),
            "maxOptSteps": request.max_opt_steps,
        }
        return EMBED_TPL % (request.max_opt_steps, json_for_script(payload))
