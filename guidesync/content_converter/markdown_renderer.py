"""HTML to Markdown rendering using markdownify.

Article bodies pulled from the help center are turned back into the local
Markdown dialect. markdownify's generic element mapping covers paragraphs,
emphasis, links, lists, code and tables; <div> and <h1>-<h6> are overridden
so their attributes survive as compact attribute lists.
"""

import re

from markdownify import MarkdownConverter as BaseMarkdownConverter

from .attributes import format_attribute_list

_WHITESPACE_RE = re.compile(r'[\t \r\n]+')
_LANGUAGE_PREFIX = 'language-'


def _code_language(el):
    """Recover the fence info string from <pre><code class="language-xxx">."""
    code = el.find('code')
    if code is None:
        return None
    for name in code.get('class') or []:
        if name.startswith(_LANGUAGE_PREFIX):
            return name[len(_LANGUAGE_PREFIX):]
    return None


class GuideMarkdownConverter(BaseMarkdownConverter):
    """markdownify converter emitting the guidesync Markdown dialect."""

    def __init__(self, **options):
        options.setdefault('heading_style', 'atx')
        options.setdefault('bullets', '-')
        options.setdefault('strong_em_symbol', '*')
        # The backend's HTML is trusted, render text as-is
        options.setdefault('escape_asterisks', False)
        options.setdefault('escape_underscores', False)
        options.setdefault('escape_misc', False)
        options.setdefault('code_language_callback', _code_language)
        # Keep trailing separation so block rules end with their newlines
        options.setdefault('strip_document', 'lstrip')
        super().__init__(**options)

    def _is_in_table_cell(self, parent_tags):
        return 'td' in parent_tags or 'th' in parent_tags

    def convert_div(self, el, text, parent_tags):
        """Convert <div> to a ::: fenced container.

        The opening fence carries the element's attributes in compact
        notation, e.g. ``:::{#main .container}``. The internal fence marker
        attribute is dropped. A nested div always carries a list (``:::{}``
        at minimum) since a bare ``:::`` inside a fence closes it.
        """
        if '_inline' in parent_tags:
            return ' ' + text.strip() + ' '

        attributes = format_attribute_list(el.attrs)
        if not attributes and 'div' in parent_tags:
            attributes = '{}'
        fence = ':::' + attributes
        return '\n\n' + fence + '\n' + text.strip() + '\n:::\n\n'

    def convert_hN(self, n, el, text, parent_tags):
        """Convert <hN> to an ATX heading with a trailing attribute list."""
        if '_inline' in parent_tags:
            return text

        level = max(1, min(6, n))
        text = _WHITESPACE_RE.sub(' ', text.strip())

        attributes = format_attribute_list(el.attrs)
        if attributes:
            text = text + ' ' + attributes

        return '\n\n' + '#' * level + ' ' + text + '\n'

    def convert_p(self, el, text, parent_tags):
        """Convert paragraphs, keeping one line per paragraph in table cells."""
        if self._is_in_table_cell(parent_tags):
            text = text.strip()
            return text + '\n' if text else ''
        return super().convert_p(el, text, parent_tags)

    def _cell_text(self, el, text):
        colspan = 1
        if 'colspan' in el.attrs and el['colspan'].isdigit():
            colspan = max(1, min(1000, int(el['colspan'])))
        # Pipe rows cannot hold newlines, paragraph breaks become <br>
        cell_text = text.strip().replace('\n', '<br>')
        while '<br><br>' in cell_text:
            cell_text = cell_text.replace('<br><br>', '<br>')
        while cell_text.endswith('<br>'):
            cell_text = cell_text.removesuffix('<br>')
        return ' ' + cell_text + ' |' * colspan

    def convert_td(self, el, text, parent_tags):
        return self._cell_text(el, text)

    def convert_th(self, el, text, parent_tags):
        return self._cell_text(el, text)

    def convert_br(self, el, text, parent_tags):
        """Convert <br>, preserving it literally inside table cells."""
        if self._is_in_table_cell(parent_tags):
            return '<br>'
        return super().convert_br(el, text, parent_tags)


def render_markdown(html: str, **options) -> str:
    """Render an HTML fragment to Markdown.

    Malformed markup is repaired by BeautifulSoup's html.parser on a
    best-effort basis. Failures inside markdownify or BeautifulSoup
    propagate unchanged.
    """
    return GuideMarkdownConverter(**options).convert(html)
