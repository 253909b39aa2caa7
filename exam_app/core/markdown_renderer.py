"""Markdown rendering of question text for the desktop exam client.

Question text is authored as Markdown in the admin console. Raw HTML is
disabled, so tags typed into a question are shown as text.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt

from exam_app.core.models import SanitizedQuestion


@dataclass(slots=True)
class MarkdownRenderer:
    """Converts markdown into HTML fragments."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""
        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No question text.</em></p>"
        return self._markdown.render(sanitized)

    def render_question(self, index: int, question: SanitizedQuestion) -> str:
        """Render a question prefixed with its 1-based position."""
        return self.render_fragment(f"**{index + 1}.** {question.question}")


renderer = MarkdownRenderer()
