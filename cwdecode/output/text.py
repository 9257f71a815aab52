"""Text rendering of token streams."""

from typing import Dict, Iterable, Iterator, Optional

from ..core import Token

DEFAULT_SYMBOLS: Dict[Token, str] = {
    Token.DIT: ".",
    Token.DAH: "_",
    Token.END_LETTER: " ",
    Token.END_WORD: " : ",
    Token.PAUSE: " pause ",
    Token.NOOP: "",
    Token.ERROR: " ERROR ",
}


class TokenRenderer:
    """Render tokens as text."""

    def __init__(self, symbols: Optional[Dict[Token, str]] = None):
        """
        Initialize TokenRenderer.

        Args:
            symbols: Overrides for the default symbol of any token
        """
        self.symbols = dict(DEFAULT_SYMBOLS)
        if symbols:
            self.symbols.update(symbols)

    def render_token(self, token: Token) -> str:
        return self.symbols[token]

    def render_stream(self, tokens: Iterable[Token]) -> Iterator[str]:
        """Lazily render tokens, skipping those with an empty symbol."""
        for token in tokens:
            text = self.symbols[token]
            if text:
                yield text

    def render(self, tokens: Iterable[Token]) -> str:
        """Render a finite token sequence to one string."""
        return "".join(self.render_stream(tokens))
