"""Markdown to HTML rendering using markdown-it-py.

The CommonMark parser is extended with:

- ``:::`` fenced containers rendered as <div>, with an optional compact
  attribute list on the opening fence (``:::{#id .class key=value}``);
- trailing attribute lists on ATX headings (``# Title {#id .class}``);
- pipe tables and strikethrough;
- hard line breaks for newlines inside paragraphs;
- an optional pass opening external links in a new tab.

Raw HTML in the source is passed through unescaped. The renderer trusts
its input: it is meant for articles written by the local author and is not
a sanitizer for untrusted content.
"""

import re
from typing import Dict, Optional

from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock
from markdown_it.rules_core import StateCore
from mdit_py_plugins.attrs.parse import ParseError, parse
from mdit_py_plugins.utils import is_code_block

from .attributes import MARKER_ATTRIBUTE
from .link_target import link_target_plugin

_FENCE_OPEN_RE = re.compile(r'^:::(?P<attrs>\{.*\})?[ \t]*$')
_FENCE_CLOSE_RE = re.compile(r'^:::[ \t]*$')
_HEADING_ATTRS_RE = re.compile(r'[ \t]+(?P<attrs>\{[^{}\n]*\})[ \t]*$')
_CODE_FENCE_RE = re.compile(r'^(?P<marker>`{3,}|~{3,})(?P<info>.*)$')

# env key counting the fences of one conversion
_FENCE_COUNT_KEY = 'fence_count'


def parse_attribute_list(text: str) -> Optional[Dict[str, str]]:
    """Parse a ``{...}`` attribute list.

    Returns the attributes ordered id, class, then the remaining keys in
    declaration order, or None when the text is not a valid attribute list.
    """
    try:
        end, attrs = parse(text)
    except ParseError:
        return None
    # the closing brace must end the text
    if end != len(text) - 1:
        return None

    ordered = {}
    for key in ('id', 'class'):
        if key in attrs:
            ordered[key] = attrs[key]
    for key, value in attrs.items():
        if key not in ordered:
            ordered[key] = value
    return ordered


def _line(state: StateBlock, line: int) -> str:
    start = state.bMarks[line] + state.tShift[line]
    return state.src[start:state.eMarks[line]]


def _code_fence_marker(text: str) -> Optional[str]:
    """Return the opening marker when the line starts a fenced code block."""
    match = _CODE_FENCE_RE.match(text)
    if not match:
        return None
    marker = match.group('marker')
    # backtick info strings cannot contain backticks
    if marker[0] == '`' and '`' in match.group('info'):
        return None
    return marker


def _closes_code_fence(text: str, marker: str) -> bool:
    stripped = text.rstrip(' \t')
    return (
        len(stripped) >= len(marker)
        and stripped == marker[0] * len(stripped)
    )


def _fenced_div_rule(state: StateBlock, startLine: int, endLine: int, silent: bool) -> bool:
    if is_code_block(state, startLine):
        return False

    match = _FENCE_OPEN_RE.match(_line(state, startLine))
    if not match:
        return False

    attrs: Dict[str, str] = {}
    if match.group('attrs'):
        parsed = parse_attribute_list(match.group('attrs'))
        if parsed is None:
            return False
        attrs = parsed

    if silent:
        return True

    # Find the matching close; ":::{...}" opens a nested fence, ":::" closes one
    depth = 1
    nextLine = startLine
    closed = False
    # opening marker of the code fence being skipped, if any
    code_marker: Optional[str] = None
    while True:
        nextLine += 1
        if nextLine >= endLine:
            # unclosed fence ends with its parent
            break

        if state.isEmpty(nextLine):
            continue
        if state.sCount[nextLine] < state.blkIndent:
            break
        if is_code_block(state, nextLine):
            continue

        text = _line(state, nextLine)
        if code_marker is not None:
            if _closes_code_fence(text, code_marker):
                code_marker = None
            continue
        code_marker = _code_fence_marker(text)
        if code_marker is not None:
            continue

        if _FENCE_CLOSE_RE.match(text):
            depth -= 1
            if depth == 0:
                closed = True
                break
            continue
        nested = _FENCE_OPEN_RE.match(text)
        if nested and parse_attribute_list(nested.group('attrs')) is not None:
            depth += 1

    fence_number = state.env.get(_FENCE_COUNT_KEY, 0)
    state.env[_FENCE_COUNT_KEY] = fence_number + 1

    old_parent = state.parentType
    old_line_max = state.lineMax
    state.parentType = 'fenced_div'  # type: ignore[assignment]
    # keep lazy continuation lines from running past the closing fence
    state.lineMax = nextLine

    token = state.push('fenced_div_open', 'div', 1)
    token.markup = ':::'
    token.block = True
    token.map = [startLine, nextLine]
    token.attrSet(MARKER_ATTRIBUTE, str(fence_number))
    for key, value in attrs.items():
        token.attrSet(key, value)

    state.md.block.tokenize(state, startLine + 1, nextLine)

    token = state.push('fenced_div_close', 'div', -1)
    token.markup = ':::'
    token.block = True

    state.parentType = old_parent
    state.lineMax = old_line_max
    state.line = nextLine + (1 if closed else 0)
    return True


def fenced_div_plugin(md: MarkdownIt) -> None:
    """Parse ``:::`` fenced containers into <div> elements."""
    md.block.ruler.before(
        'fence',
        'fenced_div',
        _fenced_div_rule,
        {'alt': ['paragraph', 'reference', 'blockquote', 'list']},
    )


def _heading_attrs_rule(state: StateCore) -> None:
    tokens = state.tokens
    for index, token in enumerate(tokens):
        if token.type != 'heading_open' or index + 1 >= len(tokens):
            continue
        inline = tokens[index + 1]
        if inline.type != 'inline':
            continue

        match = _HEADING_ATTRS_RE.search(inline.content)
        if not match:
            continue
        attrs = parse_attribute_list(match.group('attrs'))
        if attrs is None:
            # not an attribute list, leave it as heading text
            continue

        inline.content = inline.content[:match.start()]
        for key, value in attrs.items():
            token.attrSet(key, value)


def heading_attrs_plugin(md: MarkdownIt) -> None:
    """Attach trailing ``{...}`` attribute lists to ATX headings.

    Runs between block and inline parsing so the attribute list is removed
    before the heading text is tokenized.
    """
    md.core.ruler.after('block', 'heading_attrs', _heading_attrs_rule)


def create_parser(enable_link_target_blank: bool = False) -> MarkdownIt:
    """Build a markdown-it parser configured for the guidesync dialect."""
    md = (
        MarkdownIt('commonmark', {'html': True, 'breaks': True})
        .enable(['table', 'strikethrough'])
        .use(fenced_div_plugin)
        .use(heading_attrs_plugin)
    )
    if enable_link_target_blank:
        md.use(link_target_plugin)
    return md


def render_html(markdown: str, enable_link_target_blank: bool = False) -> str:
    """Render Markdown to an HTML fragment.

    A new parser is built for every call so no state is shared between
    conversions. Errors raised by markdown-it-py propagate unchanged.
    """
    md = create_parser(enable_link_target_blank)
    return md.render(markdown, {})
