"""Markdown rendering for question prompts and option labels."""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt


@dataclass(slots=True)
class PromptRenderer:
    """Converts question markdown into HTML fragments for the hosting UI."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_prompt(self, markdown_text: str) -> str:
        """Render a block-level prompt; an empty prompt yields an empty string."""
        sanitized = markdown_text.strip()
        if not sanitized:
            return ""
        return self._markdown.render(sanitized)

    def render_label(self, markdown_text: str) -> str:
        """Render an option label inline, without a wrapping paragraph."""
        return self._markdown.renderInline(markdown_text.strip())


renderer = PromptRenderer()
