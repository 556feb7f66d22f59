"""Content conversion module for Markdown ↔ HTML conversion.

This module provides the MarkdownConverter for bidirectional conversion
between local Markdown article files and help-center HTML bodies.
"""

from .attributes import MARKER_ATTRIBUTE, encode_attributes, format_attribute_list
from .markdown_converter import MarkdownConverter

__all__ = [
    'MarkdownConverter',
    'MARKER_ATTRIBUTE',
    'encode_attributes',
    'format_attribute_list',
]
