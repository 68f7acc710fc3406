"""Lexical analysis for Thenga Lang: converts raw source text into an ordered list of Tokens.

The scanner is a single forward pass over a position cursor. Whitespace and newlines are insignificant (statement
boundaries are decided by the parser), `//` and `/* */` comments are discarded, and the first malformed token aborts
the whole scan with a LexicalError.
"""

from thenga.lang.error import LexicalError
from thenga.syntax.tokens import KEYWORD_LITERALS, KEYWORDS, Token, TokenType


class Scanner:
    """Produces Tokens from source. Not restartable: call tokenize once per Scanner."""
    DIGITS = "0123456789"
    ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\"}

    # longest match first
    OPERATORS = [
        ("===", TokenType.BILKUL_SAME),
        ("==", TokenType.SAME_AANO),
        ("!=", TokenType.VENDATHILLA),
        (">=", TokenType.VELLIYATHUM_SAME),
        ("<=", TokenType.CHERIYATHUM_SAME),
        ("&&", TokenType.PINNEM),
        ("||", TokenType.ALLEL),
        ("+", TokenType.PLUS),
        ("-", TokenType.MINUS),
        ("*", TokenType.MULTIPLY),
        ("/", TokenType.DIVIDE),
        ("%", TokenType.MODULO),
        ("=", TokenType.EQUALS),
        (">", TokenType.VELLIYA),
        ("<", TokenType.CHERIYA),
        ("!", TokenType.ONNUM_VENDA),
        ("(", TokenType.LPAREN),
        (")", TokenType.RPAREN),
        ("{", TokenType.LBRACE),
        ("}", TokenType.RBRACE),
        ("[", TokenType.LBRACKET),
        ("]", TokenType.RBRACKET),
        (",", TokenType.COMMA),
        (";", TokenType.SEMICOLON),
        (".", TokenType.DOT),
        (":", TokenType.COLON),
    ]

    def __init__(self, source):
        self.source = source
        self.position = 0
        self.line = 1
        self.column = 1

    @property
    def current(self):
        """Character under the cursor, None at end of input."""
        if self.position >= len(self.source):
            return None
        return self.source[self.position]

    def peek(self, offset=1):
        pos = self.position + offset
        if pos >= len(self.source):
            return None
        return self.source[pos]

    def error(self, msg):
        raise LexicalError(msg, self.line, self.column)

    def advance(self):
        if self.current == "\n":
            self.line += 1
            self.column = 0
        self.position += 1
        self.column += 1

    def skip_line_comment(self):
        while self.current is not None and self.current != "\n":
            self.advance()

    def skip_block_comment(self):
        """Skips a block comment. An unterminated block comment runs to the end of input."""
        self.advance()
        self.advance()
        while self.current is not None:
            if self.current == "*" and self.peek() == "/":
                self.advance()
                self.advance()
                return
            self.advance()

    def read_number(self):
        line, column = self.line, self.column
        digits = ""
        has_dot = False

        while self.current is not None and self.current in Scanner.DIGITS + ".":
            if self.current == ".":
                if has_dot:
                    self.error("Invalid number: multiple decimal points")
                has_dot = True
            digits += self.current
            self.advance()

        return Token(TokenType.NUMBER, float(digits), line, column)

    def read_string(self, quote):
        line, column = self.line, self.column
        chars = []
        self.advance()

        while self.current is not None and self.current != quote:
            if self.current == "\\":
                self.advance()
                if self.current is None:
                    self.error("Unterminated string")
                chars.append(quote if self.current == quote else Scanner.ESCAPES.get(self.current, self.current))
            else:
                chars.append(self.current)
            self.advance()

        if self.current is None:
            self.error("Unterminated string")

        self.advance()
        return Token(TokenType.STRING, "".join(chars), line, column)

    def read_identifier(self):
        line, column = self.line, self.column
        start = self.position

        while self.current is not None and (self.current.isascii() and self.current.isalnum() or self.current == "_"):
            self.advance()

        name = self.source[start:self.position]
        category = KEYWORDS.get(name, TokenType.IDENTIFIER)
        value = KEYWORD_LITERALS.get(category, name)
        return Token(category, value, line, column)

    def read_operator(self):
        line, column = self.line, self.column
        for symbol, category in Scanner.OPERATORS:
            if self.source.startswith(symbol, self.position):
                for __ in symbol:
                    self.advance()
                return Token(category, symbol, line, column)
        self.error(f"Unexpected character: '{self.current}'")

    def next_token(self):
        """Returns the next Token, or an EOF Token once the source is exhausted."""
        while self.current is not None:
            char = self.current

            if char.isspace():
                self.advance()
            elif char == "/" and self.peek() == "/":
                self.skip_line_comment()
            elif char == "/" and self.peek() == "*":
                self.skip_block_comment()
            elif char in Scanner.DIGITS:
                return self.read_number()
            elif char in "\"'":
                return self.read_string(char)
            elif char.isascii() and char.isalpha() or char == "_":
                return self.read_identifier()
            else:
                return self.read_operator()

        return Token(TokenType.EOF, None, self.line, self.column)

    def tokenize(self):
        """Scans the whole source. The returned list always ends with exactly one EOF Token."""
        tokens = [self.next_token()]
        while tokens[-1].type is not TokenType.EOF:
            tokens.append(self.next_token())
        return tokens


def tokenize(source):
    """Convenience wrapper around Scanner(source).tokenize()."""
    return Scanner(source).tokenize()
