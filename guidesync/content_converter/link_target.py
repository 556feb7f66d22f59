"""Open external links in a new browsing context.

Adds ``target="_blank"`` and ``rel="noopener noreferrer"`` to every parsed
link whose destination is not an anchor within the same document.
"""

from typing import Sequence

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

SAME_DOCUMENT_PREFIXES = ('#', '/#')


def is_same_document_link(href: str) -> bool:
    """Return True for in-page anchors such as ``#section`` or ``/#section``."""
    return href.startswith(SAME_DOCUMENT_PREFIXES)


def apply_link_target(tokens: Sequence[Token]) -> None:
    """Walk the token tree once, marking external links in place.

    Inline children are visited recursively; only ``link_open`` tokens
    whose href fails the same-document check are modified.
    """
    for token in tokens:
        if token.type == 'link_open':
            href = token.attrGet('href') or ''
            if not is_same_document_link(str(href)):
                token.attrSet('target', '_blank')
                token.attrSet('rel', 'noopener noreferrer')
        if token.children:
            apply_link_target(token.children)


def _link_target_rule(state: StateCore) -> None:
    apply_link_target(state.tokens)


def link_target_plugin(md: MarkdownIt) -> None:
    """Register the link target pass to run once inline parsing is done."""
    md.core.ruler.push('link_target', _link_target_rule)
