"""Recursive-descent parser for Thenga Lang. Produces one Program from a token list, or raises a positioned
ParseError on the first unexpected token.

Expressions follow a precedence ladder, lowest to highest, every binary level folding left:

```
<expression> ::= <or>
<or>         ::= <and> ( "||" <and> )*
<and>        ::= <equality> ( "&&" <equality> )*
<equality>   ::= <relation> ( ( "==" | "===" | "!=" ) <relation> )*
<relation>   ::= <additive> ( ( ">" | "<" | ">=" | "<=" ) <additive> )*
<additive>   ::= <term> ( ( "+" | "-" ) <term> )*
<term>       ::= <unary> ( ( "*" | "/" | "%" ) <unary> )*
<unary>      ::= ( "!" | "-" | "kath_mone" ) <unary> | <postfix>
<postfix>    ::= <primary> ( "." <name> | "[" <expression> "]" | "(" <args> ")" )*
```

Statements are chosen by the category of their first token; anything else is an expression statement, which becomes
an assignment when followed by "=". Semicolons are optional after every statement.
"""

from thenga.lang.error import ParseError
from thenga.syntax import nodes
from thenga.syntax.tokens import OPERATOR_SYMBOLS, SPELLINGS, TokenType


class Parser:
    """Parses a token list ending in EOF. Tokens are read by index and never modified."""

    # keyword-spelled helpers rewritten to calls of built-ins: category -> (built-in name, fixed arg count or None)
    HELPER_CALLS = {
        TokenType.KOOTTU: ("add", 2),
        TokenType.KURAKKU: ("subtract", 2),
        TokenType.GUNIKKU: ("multiply", 2),
        TokenType.HARIKKU: ("divide", 2),
        TokenType.RANDOM: ("random", 0),
        TokenType.JOIN_PANNUDA: ("join", None),
        TokenType.SPLIT_PANNUDA: ("split", None),
        TokenType.TRIM_PANNUDA: ("trim", None),
        TokenType.KOOTI_VEKKADA: ("concat", None),
        TokenType.PUSH: ("push", None),
        TokenType.POP: ("pop", None),
        TokenType.LENGTH: ("length", None),
        TokenType.ARRAY: ("array", None),
    }

    # keyword-spelled single argument expressions: category -> node
    WRAPPERS = {
        TokenType.CHODHIK: nodes.InputExpression,
        TokenType.ITHENTHONN: nodes.TypeOfExpression,
        TokenType.COPY_ADI: nodes.CopyExpression,
        TokenType.NER_AANO_MWONE: nodes.TruthyCheckExpression,
        TokenType.AALU_SHERI_AANO: nodes.ValidateExpression,
    }

    # binary precedence levels, lowest first
    LEVELS = [
        (TokenType.ALLEL,),
        (TokenType.PINNEM,),
        (TokenType.SAME_AANO, TokenType.BILKUL_SAME, TokenType.VENDATHILLA),
        (TokenType.VELLIYA, TokenType.CHERIYA, TokenType.VELLIYATHUM_SAME, TokenType.CHERIYATHUM_SAME),
        (TokenType.PLUS, TokenType.MINUS),
        (TokenType.MULTIPLY, TokenType.DIVIDE, TokenType.MODULO),
    ]

    def __init__(self, tokens):
        if not tokens or tokens[-1].type is not TokenType.EOF:
            raise ParseError("token stream must end with EOF", internal=True)

        self.tokens = tokens
        self.position = 0
        self.loop_depth = 0
        self.function_depth = 0

        self.statement_rules = {
            TokenType.ITH_AAN: self.variable_declaration,
            TokenType.ITH_FIXED_AAN: self.variable_declaration,
            TokenType.PANI: self.function_declaration,
            TokenType.PINNE_PARAYAM: self.function_declaration,
            TokenType.PARA: self.print_statement,
            TokenType.ENTHADA_ITH: self.debug_statement,
            TokenType.LOG_CHEYY: self.debug_statement,
            TokenType.KETT_PARANJU: self.warning_statement,
            TokenType.SERIYANO: self.if_statement,
            TokenType.ODI_REPEAT_MWONE: self.while_loop,
            TokenType.REPEAT_ADI: self.for_loop,
            TokenType.ODARUTH_MONE: self.break_statement,
            TokenType.VITT_KALA: self.continue_statement,
            TokenType.THIRICH_THA: self.return_statement,
            TokenType.TRY_CHEYTH_NOKK: self.try_statement,
            TokenType.THERI_VILI: self.throw_statement,
            TokenType.NEE_PO_MONE_DINESHA: self.delete_statement,
            TokenType.SHERIKKUM_POKKODA: self.delete_statement,
            TokenType.ADIPOLI_AAN: self.assert_statement,
            TokenType.ITH_MANASILAAYO: self.assert_statement,
            TokenType.SCENE_IDD: self.sleep_statement,
            TokenType.CHUMMA_IRI_MONE: self.pass_statement,
        }

    # ==================== token cursor ====================

    @property
    def current(self):
        return self.tokens[self.position]

    def error(self, msg, token=None):
        token = token or self.current
        raise ParseError(msg, token.line, token.column)

    def advance(self):
        token = self.current
        if token.type is not TokenType.EOF:
            self.position += 1
        return token

    def match(self, *categories):
        return self.current.type in categories

    def expect(self, category):
        """Consumes and returns the current token if it is of category, raises a ParseError otherwise."""
        if self.current.type is not category:
            self.error(f"Expected {category.name}, got {self.current.type.name}")
        return self.advance()

    def skip_semicolon(self):
        if self.match(TokenType.SEMICOLON):
            self.advance()

    # ==================== statements ====================

    def parse(self):
        """Parses every token up to EOF into a Program."""
        statements = []
        while not self.match(TokenType.EOF):
            statements.append(self.statement())
            self.skip_semicolon()
        return nodes.Program(tuple(statements))

    def statement(self):
        rule = self.statement_rules.get(self.current.type, self.expression_statement)
        return rule()

    def block(self):
        """Parses "{" <statement>* "}"."""
        self.expect(TokenType.LBRACE)
        statements = []
        while not self.match(TokenType.RBRACE, TokenType.EOF):
            statements.append(self.statement())
            self.skip_semicolon()
        self.expect(TokenType.RBRACE)
        return nodes.Block(tuple(statements))

    def parenthesized(self):
        self.expect(TokenType.LPAREN)
        expr = self.expression()
        self.expect(TokenType.RPAREN)
        return expr

    def loop_body(self):
        self.loop_depth += 1
        try:
            return self.block()
        finally:
            self.loop_depth -= 1

    def function_body(self):
        """A function body starts a new control context: loops outside it cannot be broken from inside."""
        saved_loop_depth, self.loop_depth = self.loop_depth, 0
        self.function_depth += 1
        try:
            return self.block()
        finally:
            self.function_depth -= 1
            self.loop_depth = saved_loop_depth

    def variable_declaration(self):
        constant = self.advance().type is TokenType.ITH_FIXED_AAN
        name = self.expect(TokenType.IDENTIFIER).value
        self.expect(TokenType.EQUALS)
        return nodes.VariableDeclaration(name, self.expression(), constant)

    def function_declaration(self):
        is_async = self.match(TokenType.PINNE_PARAYAM)
        if is_async:
            self.advance()
        self.expect(TokenType.PANI)
        name = self.expect(TokenType.IDENTIFIER).value

        self.expect(TokenType.LPAREN)
        params = []
        if not self.match(TokenType.RPAREN):
            params.append(self.expect(TokenType.IDENTIFIER).value)
            while self.match(TokenType.COMMA):
                self.advance()
                params.append(self.expect(TokenType.IDENTIFIER).value)
        self.expect(TokenType.RPAREN)

        return nodes.FunctionDeclaration(name, tuple(params), self.function_body(), is_async)

    def print_statement(self):
        self.advance()
        return nodes.PrintStatement(self.parenthesized())

    def debug_statement(self):
        self.advance()
        return nodes.DebugStatement(self.parenthesized())

    def warning_statement(self):
        self.advance()
        return nodes.WarningStatement(self.parenthesized())

    def if_statement(self):
        self.advance()
        condition = self.parenthesized()
        then_block = self.block()

        else_ifs = []
        while self.match(TokenType.ALLELUM):
            self.advance()
            else_if_condition = self.parenthesized()
            else_ifs.append(nodes.ElseIf(else_if_condition, self.block()))

        else_block = None
        if self.match(TokenType.ALLENGIL):
            self.advance()
            else_block = self.block()

        return nodes.IfStatement(condition, then_block, tuple(else_ifs), else_block)

    def while_loop(self):
        self.advance()
        condition = self.parenthesized()
        return nodes.WhileLoop(condition, self.loop_body())

    def for_loop(self):
        self.advance()
        times = self.parenthesized()
        return nodes.ForLoop(times, self.loop_body())

    def break_statement(self):
        token = self.advance()
        if not self.loop_depth:
            self.error(f"'{token.spelling}' outside of a loop", token)
        return nodes.BreakStatement()

    def continue_statement(self):
        token = self.advance()
        if not self.loop_depth:
            self.error(f"'{token.spelling}' outside of a loop", token)
        return nodes.ContinueStatement()

    def return_statement(self):
        token = self.advance()
        if not self.function_depth:
            self.error(f"'{token.spelling}' outside of a function", token)
        if self.match(TokenType.SEMICOLON, TokenType.RBRACE, TokenType.EOF):
            return nodes.ReturnStatement(None)
        return nodes.ReturnStatement(self.expression())

    def try_statement(self):
        token = self.advance()
        body = self.block()

        handler = error_name = None
        if self.match(TokenType.PIDIKK):
            self.advance()
            self.expect(TokenType.LPAREN)
            error_name = self.expect(TokenType.IDENTIFIER).value
            self.expect(TokenType.RPAREN)
            handler = self.block()

        finalizer = None
        if self.match(TokenType.ETTAVUM_AVASANAM):
            self.advance()
            finalizer = self.block()

        if handler is None and finalizer is None:
            self.error(f"'{token.spelling}' expects a 'pidikk' or 'ettavum_avasanam' block")

        return nodes.TryStatement(body, handler, error_name, finalizer)

    def throw_statement(self):
        self.advance()
        return nodes.ThrowStatement(self.parenthesized())

    def delete_statement(self):
        force = self.advance().type is TokenType.SHERIKKUM_POKKODA
        return nodes.DeleteStatement(self.parenthesized(), force)

    def assert_statement(self):
        detailed = self.advance().type is TokenType.ITH_MANASILAAYO
        self.expect(TokenType.LPAREN)
        condition = self.expression()

        message = None
        if detailed and self.match(TokenType.COMMA):
            self.advance()
            message = self.expression()

        self.expect(TokenType.RPAREN)
        return nodes.AssertStatement(condition, message)

    def sleep_statement(self):
        self.advance()
        return nodes.SleepStatement(self.parenthesized())

    def pass_statement(self):
        self.advance()
        return nodes.PassStatement()

    def expression_statement(self):
        expr = self.expression()
        if self.match(TokenType.EQUALS):
            self.advance()
            return nodes.Assignment(expr, self.expression())
        return expr

    # ==================== expressions ====================

    def expression(self):
        return self.binary(0)

    def binary(self, level):
        """Parses precedence level `level` of Parser.LEVELS, folding repeated operators to the left."""
        if level == len(Parser.LEVELS):
            return self.unary()

        left = self.binary(level + 1)
        while self.match(*Parser.LEVELS[level]):
            operator = OPERATOR_SYMBOLS[self.advance().type]
            left = nodes.BinaryOperation(left, operator, self.binary(level + 1))
        return left

    def unary(self):
        if self.match(TokenType.ONNUM_VENDA, TokenType.MINUS):
            operator = OPERATOR_SYMBOLS[self.advance().type]
            return nodes.UnaryOperation(operator, self.unary())
        if self.match(TokenType.KATH_MONE):
            self.advance()
            return nodes.AwaitExpression(self.unary())
        return self.postfix()

    def postfix(self):
        expr = self.primary()

        while True:
            if self.match(TokenType.DOT):
                self.advance()
                expr = nodes.MemberAccess(expr, self.name())
            elif self.match(TokenType.LBRACKET):
                self.advance()
                index = self.expression()
                self.expect(TokenType.RBRACKET)
                expr = nodes.IndexAccess(expr, index)
            elif self.match(TokenType.LPAREN):
                expr = nodes.FunctionCall(expr, self.arguments())
            else:
                return expr

    def arguments(self):
        """Parses "(" [ <expression> ( "," <expression> )* ] ")"."""
        self.expect(TokenType.LPAREN)
        args = []
        if not self.match(TokenType.RPAREN):
            args.append(self.expression())
            while self.match(TokenType.COMMA):
                self.advance()
                args.append(self.expression())
        self.expect(TokenType.RPAREN)
        return tuple(args)

    def name(self):
        """Member and property names: identifiers or keyword spellings (e.g. `xs.length`)."""
        if self.match(TokenType.IDENTIFIER) or self.current.type in SPELLINGS:
            return self.advance().spelling
        return self.expect(TokenType.IDENTIFIER).value

    def primary(self):
        token = self.current

        if token.type is TokenType.NUMBER:
            self.advance()
            return nodes.NumberLiteral(token.value)
        if token.type is TokenType.STRING:
            self.advance()
            return nodes.StringLiteral(token.value)
        if token.type in (TokenType.SHERIYA, TokenType.SHERIYALLA):
            self.advance()
            return nodes.BooleanLiteral(token.value)
        if token.type is TokenType.ONNUM_ILLA:
            self.advance()
            return nodes.NullLiteral()
        if token.type is TokenType.LBRACKET:
            return self.array_literal()
        if token.type is TokenType.LBRACE:
            return self.object_literal()
        if token.type is TokenType.LPAREN:
            return self.parenthesized()
        if token.type in Parser.WRAPPERS:
            self.advance()
            return Parser.WRAPPERS[token.type](self.parenthesized())
        if token.type in Parser.HELPER_CALLS:
            return self.helper_call()
        if token.type is TokenType.VILI:
            return self.explicit_call()
        if token.type is TokenType.IDENTIFIER:
            self.advance()
            return nodes.Identifier(token.value)

        self.error(f"Unexpected token: {token.type.name}")

    def array_literal(self):
        self.expect(TokenType.LBRACKET)
        elements = []
        while not self.match(TokenType.RBRACKET):
            elements.append(self.expression())
            if not self.match(TokenType.COMMA):
                break
            self.advance()
        self.expect(TokenType.RBRACKET)
        return nodes.ArrayLiteral(tuple(elements))

    def object_literal(self):
        self.expect(TokenType.LBRACE)
        properties = []
        while not self.match(TokenType.RBRACE):
            if self.match(TokenType.STRING):
                key = self.advance().value
            else:
                key = self.name()
            self.expect(TokenType.COLON)
            properties.append(nodes.Property(key, self.expression()))
            if not self.match(TokenType.COMMA):
                break
            self.advance()
        self.expect(TokenType.RBRACE)
        return nodes.ObjectLiteral(tuple(properties))

    def helper_call(self):
        token = self.advance()
        name, arity = Parser.HELPER_CALLS[token.type]
        args = self.arguments()
        if arity is not None and len(args) != arity:
            self.error(f"'{token.spelling}' expects {arity} arguments, got {len(args)}", token)
        return nodes.FunctionCall(nodes.Identifier(name), args)

    def explicit_call(self):
        """`vili f(args)`: an ordinary call spelled with the call keyword."""
        self.advance()
        expr = self.postfix()
        if not isinstance(expr, nodes.FunctionCall):
            self.error("Expected a function call after 'vili'")
        return expr


def parse(tokens):
    """Convenience wrapper around Parser(tokens).parse()."""
    return Parser(tokens).parse()
