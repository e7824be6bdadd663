"""Syntax colorization of single lines with Pygments."""

from __future__ import annotations

import logging
from typing import Optional

from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]
DEFAULT_STYLE = "monokai"


def _hex_to_rgb(value: str) -> RGB:
    value = value.lstrip('#')
    if len(value) == 3:
        value = ''.join(ch * 2 for ch in value)
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


class Highlighter:
    """Turns one line of text into colored spans.

    The language profile is chosen once from the file name; files Pygments
    does not recognize get the plain text profile, which yields one
    uncolored span per line.
    """

    def __init__(self, filename: Optional[str] = None, style: str = DEFAULT_STYLE):
        self.lexer = self._lexer_for(filename)
        try:
            self.style = get_style_by_name(style)
        except ClassNotFound:
            logger.warning(f"Unknown Pygments style {style!r}, using {DEFAULT_STYLE}")
            self.style = get_style_by_name(DEFAULT_STYLE)
        self._colors: dict = {}

    @staticmethod
    def _lexer_for(filename: Optional[str]):
        # Keep whitespace intact so spans cover the line exactly
        options = {'stripnl': False, 'ensurenl': False}
        if filename:
            try:
                return get_lexer_for_filename(filename, **options)
            except ClassNotFound:
                logger.debug(f"No lexer for {filename}, using plain text")
        return TextLexer(**options)

    @property
    def language(self) -> str:
        return self.lexer.name

    @property
    def is_plain(self) -> bool:
        return isinstance(self.lexer, TextLexer)

    def color_for(self, token_type) -> Optional[RGB]:
        if token_type not in self._colors:
            color = self.style.style_for_token(token_type).get('color')
            self._colors[token_type] = _hex_to_rgb(color) if color else None
        return self._colors[token_type]

    def highlight_line(self, text: str) -> list[tuple[Optional[RGB], str]]:
        """Split a line into (color, substring) pairs.

        The substrings concatenate to exactly the input; adjacent tokens of
        the same color are merged. A color of None means the terminal's
        default foreground.
        """
        if not text:
            return []
        if self.is_plain:
            return [(None, text)]
        spans: list[tuple[Optional[RGB], str]] = []
        for token_type, value in self.lexer.get_tokens(text):
            if not value:
                continue
            color = self.color_for(token_type)
            if spans and spans[-1][0] == color:
                spans[-1] = (color, spans[-1][1] + value)
            else:
                spans.append((color, value))
        if ''.join(value for _, value in spans) != text:
            # Lexer normalized something (e.g. '\r'); fall back to one span
            return [(None, text)]
        return spans
