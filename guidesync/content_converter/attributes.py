"""Compact attribute notation shared by the container and heading rules.

Encodes an element's attributes into the bracketed attribute list used by
the Markdown syntax, e.g. ``{#main .container data-section=content}``.
"""

from typing import Iterable, List, Mapping, Tuple, Union

# Tags every <div> emitted from a ::: fence. Never re-emitted as a token.
MARKER_ATTRIBUTE = 'data-fence'

AttributeValue = Union[str, List[str]]
Attributes = Union[Mapping[str, AttributeValue], Iterable[Tuple[str, AttributeValue]]]


def _as_text(value: AttributeValue) -> str:
    # BeautifulSoup hands back multi-valued attributes (class, rel, ...) as lists
    if isinstance(value, (list, tuple)):
        return ' '.join(value)
    return value if value is not None else ''


def encode_attributes(attrs: Attributes) -> List[str]:
    """Convert an attribute set into compact notation tokens.

    Tokens come out in fixed category order: the ``#id`` token, then one
    ``.class`` token per class name in source order, then ``key=value`` for
    every other attribute in declaration order. The internal marker
    attribute is always dropped.

    Args:
        attrs: Mapping or iterable of (key, value) pairs

    Returns:
        List of tokens, empty when nothing is left to encode

    Example:
        >>> encode_attributes([('id', 'foo'), ('class', 'a b')])
        ['#foo', '.a', '.b']
    """
    if isinstance(attrs, Mapping):
        attrs = attrs.items()

    id_tokens: List[str] = []
    class_tokens: List[str] = []
    other_tokens: List[str] = []

    for key, value in attrs:
        text = _as_text(value)
        if key == 'id':
            # last id wins, matching how duplicate attributes collapse
            id_tokens = ['#' + text] if text else []
        elif key == 'class':
            class_tokens.extend('.' + name for name in text.split(' ') if name)
        elif key == MARKER_ATTRIBUTE:
            continue
        else:
            other_tokens.append(f'{key}={text}')

    return id_tokens + class_tokens + other_tokens


def format_attribute_list(attrs: Attributes) -> str:
    """Render the ``{...}`` notation, or an empty string when there are no tokens."""
    tokens = encode_attributes(attrs)
    if not tokens:
        return ''
    return '{' + ' '.join(tokens) + '}'
