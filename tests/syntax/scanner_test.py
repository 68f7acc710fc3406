import unittest

from thenga.lang.error import LexicalError
from thenga.syntax.scanner import tokenize
from thenga.syntax.tokens import KEYWORDS, TokenType


def categories(source):
    return [token.type for token in tokenize(source)]


class ScannerTestCase(unittest.TestCase):

    def test_empty_source(self):
        tokens = tokenize("")
        self.assertEqual(len(tokens), 1)
        self.assertIs(tokens[0].type, TokenType.EOF)
        self.assertEqual((tokens[0].line, tokens[0].column), (1, 1))

    def test_declaration(self):
        tokens = tokenize("ith_aan x = 10;")
        self.assertEqual([token.type for token in tokens], [
            TokenType.ITH_AAN, TokenType.IDENTIFIER, TokenType.EQUALS, TokenType.NUMBER, TokenType.SEMICOLON,
            TokenType.EOF
        ])
        self.assertEqual(tokens[1].value, "x")
        self.assertEqual(tokens[3].value, 10.0)
        self.assertIsInstance(tokens[3].value, float)

    def test_every_keyword_is_reclassified(self):
        for spelling, category in KEYWORDS.items():
            self.assertEqual(categories(spelling), [category, TokenType.EOF], spelling)

    def test_keyword_literals(self):
        values = [token.value for token in tokenize("sheriya sheriyalla onnum_illa")][:-1]
        self.assertEqual(values, [True, False, None])

    def test_keyword_prefixes_are_identifiers(self):
        tokens = tokenize("para_x ith_aanx")
        self.assertEqual([token.type for token in tokens][:-1], [TokenType.IDENTIFIER, TokenType.IDENTIFIER])

    def test_positions(self):
        tokens = tokenize("ith_aan a = 1\n  para(a)")
        self.assertEqual((tokens[0].line, tokens[0].column), (1, 1))
        self.assertEqual((tokens[3].line, tokens[3].column), (1, 13))
        self.assertEqual((tokens[4].line, tokens[4].column), (2, 3))
        self.assertEqual((tokens[5].line, tokens[5].column), (2, 7))

    def test_strict_equality_before_loose(self):
        self.assertEqual(categories("a === b"), [TokenType.IDENTIFIER, TokenType.BILKUL_SAME, TokenType.IDENTIFIER,
                                                 TokenType.EOF])
        self.assertEqual(categories("a == b")[1], TokenType.SAME_AANO)
        self.assertEqual(categories("a = b")[1], TokenType.EQUALS)

    def test_multi_character_operators(self):
        self.assertEqual(categories("!= >= <= && || ! > <")[:-1], [
            TokenType.VENDATHILLA, TokenType.VELLIYATHUM_SAME, TokenType.CHERIYATHUM_SAME, TokenType.PINNEM,
            TokenType.ALLEL, TokenType.ONNUM_VENDA, TokenType.VELLIYA, TokenType.CHERIYA
        ])

    def test_delimiters(self):
        self.assertEqual(categories("( ) { } [ ] , ; . :")[:-1], [
            TokenType.LPAREN, TokenType.RPAREN, TokenType.LBRACE, TokenType.RBRACE, TokenType.LBRACKET,
            TokenType.RBRACKET, TokenType.COMMA, TokenType.SEMICOLON, TokenType.DOT, TokenType.COLON
        ])

    def test_numbers(self):
        tokens = tokenize("3.14 0 7.")
        self.assertEqual([token.value for token in tokens][:-1], [3.14, 0.0, 7.0])

    def test_multiple_decimal_points(self):
        with self.assertRaises(LexicalError) as context:
            tokenize("1.2.3")
        self.assertEqual(context.exception.msg, "Invalid number: multiple decimal points")
        self.assertEqual((context.exception.line, context.exception.column), (1, 4))

    def test_strings(self):
        tokens = tokenize("\"Hello\" 'single'")
        self.assertEqual([token.value for token in tokens][:-1], ["Hello", "single"])
        self.assertEqual(tokens[0].type, TokenType.STRING)

    def test_string_escapes(self):
        self.assertEqual(tokenize(r'"a\nb\tc\\d\"e\qf"')[0].value, 'a\nb\tc\\d"eqf')
        self.assertEqual(tokenize(r"'it\'s'")[0].value, "it's")

    def test_string_spelled_like_keyword(self):
        token = tokenize('"para"')[0]
        self.assertIs(token.type, TokenType.STRING)
        self.assertEqual(token.value, "para")

    def test_unterminated_string(self):
        for source in ['"abc', "'abc", '"abc\\']:
            with self.assertRaises(LexicalError) as context:
                tokenize(source)
            self.assertEqual(context.exception.msg, "Unterminated string")

    def test_comments(self):
        source = "// line comment\npara(1) /* block\ncomment */ para(2)"
        self.assertEqual(categories(source).count(TokenType.PARA), 2)
        self.assertEqual(categories("para(1) /* never closed"), [TokenType.PARA, TokenType.LPAREN, TokenType.NUMBER,
                                                                 TokenType.RPAREN, TokenType.EOF])

    def test_unexpected_character(self):
        with self.assertRaises(LexicalError) as context:
            tokenize("ith_aan x = 1 @ 2")
        self.assertEqual(context.exception.msg, "Unexpected character: '@'")
        self.assertEqual((context.exception.line, context.exception.column), (1, 15))

    def test_non_ascii_identifier(self):
        with self.assertRaises(LexicalError):
            tokenize("ith_aan é = 1")

    def test_single_eof(self):
        tokens = tokenize("para(1)\n\n   ")
        self.assertEqual([token.type for token in tokens].count(TokenType.EOF), 1)
        self.assertIs(tokens[-1].type, TokenType.EOF)


if __name__ == '__main__':
    unittest.main()
