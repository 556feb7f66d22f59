"""Bidirectional Markdown ↔ HTML conversion for help-center articles.

Uses markdown-it-py for Markdown→HTML (publishing a local file) and
markdownify for HTML→Markdown (pulling an article body into a local file).
"""

from .html_renderer import render_html
from .markdown_renderer import render_markdown


class MarkdownConverter:
    """Converts article bodies between Markdown and HTML.

    The two directions are independent. Every call builds its own parser
    state, so one instance can be shared between threads.

    Attributes:
        enable_link_target_blank: Whether external links rendered to HTML
            open in a new tab (``target="_blank"``)

    Example:
        >>> converter = MarkdownConverter(enable_link_target_blank=True)
        >>> converter.markdown_to_html("[docs](https://example.com/)")
        '<p><a href="https://example.com/" target="_blank" rel="noopener noreferrer">docs</a></p>\\n'
    """

    def __init__(self, enable_link_target_blank: bool = False):
        """Initialize MarkdownConverter.

        Args:
            enable_link_target_blank: Add target/rel attributes to every
                link that is not a same-document anchor
        """
        self.enable_link_target_blank = enable_link_target_blank

    def markdown_to_html(self, markdown: str) -> str:
        """Convert Markdown to an HTML fragment.

        Args:
            markdown: Markdown source, may contain raw HTML

        Returns:
            HTML string (empty string for empty input)
        """
        if not markdown:
            return ""
        return render_html(markdown, self.enable_link_target_blank)

    def html_to_markdown(self, html: str) -> str:
        """Convert an HTML fragment to Markdown.

        <div> elements become ``:::`` fenced containers and headings keep
        their attributes as ``{#id .class key=value}`` lists.

        Args:
            html: HTML fragment, malformed markup is tolerated

        Returns:
            Markdown string (empty string for empty input)
        """
        if not html:
            return ""
        return render_markdown(html)
