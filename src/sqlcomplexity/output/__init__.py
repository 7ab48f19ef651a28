"""Output rendering for complexity reports."""

from sqlcomplexity.output.renderers import OutputFormat, render, render_json, render_text

__all__ = [
    "OutputFormat",
    "render",
    "render_json",
    "render_text",
]
