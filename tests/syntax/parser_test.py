import unittest

from thenga.lang.error import ParseError
from thenga.syntax import nodes
from thenga.syntax.parser import Parser, parse
from thenga.syntax.scanner import tokenize
from thenga.syntax.tokens import Token, TokenType


def parse_source(source):
    return parse(tokenize(source))


def parse_expr(source):
    program = parse_source(source)
    return program.statements[0]


class ParserTestCase(unittest.TestCase):

    def test_empty_program(self):
        self.assertEqual(parse_source(""), nodes.Program(()))

    def test_token_stream_must_end_with_eof(self):
        with self.assertRaises(ParseError):
            Parser([Token(TokenType.NUMBER, 1.0, 1, 1)])

    def test_declarations(self):
        program = parse_source("ith_aan x = 10; ith_fixed_aan name = \"Machan\"")
        self.assertEqual(program.statements, (
            nodes.VariableDeclaration("x", nodes.NumberLiteral(10.0), False),
            nodes.VariableDeclaration("name", nodes.StringLiteral("Machan"), True),
        ))

    def test_semicolons_are_optional(self):
        self.assertEqual(len(parse_source("para(1) para(2);\npara(3)").statements), 3)

    def test_precedence(self):
        expr = parse_expr("1 + 2 * 3")
        self.assertEqual(expr, nodes.BinaryOperation(
            nodes.NumberLiteral(1.0), "+",
            nodes.BinaryOperation(nodes.NumberLiteral(2.0), "*", nodes.NumberLiteral(3.0))
        ))

        expr = parse_expr("a || b && c == d")
        self.assertEqual(expr.operator, "||")
        self.assertEqual(expr.right.operator, "&&")
        self.assertEqual(expr.right.right.operator, "==")

    def test_left_associativity(self):
        expr = parse_expr("10 - 4 - 3")
        self.assertEqual(expr, nodes.BinaryOperation(
            nodes.BinaryOperation(nodes.NumberLiteral(10.0), "-", nodes.NumberLiteral(4.0)), "-",
            nodes.NumberLiteral(3.0)
        ))

    def test_word_operators(self):
        self.assertEqual(parse_expr("a velliya b"), parse_expr("a > b"))
        self.assertEqual(parse_expr("a bilkul_same b"), parse_expr("a === b"))
        self.assertEqual(parse_expr("a pinnem b allel c"), parse_expr("a && b || c"))
        self.assertEqual(parse_expr("onnum_venda a"), parse_expr("!a"))

    def test_unary(self):
        self.assertEqual(parse_expr("-x"), nodes.UnaryOperation("-", nodes.Identifier("x")))
        self.assertEqual(parse_expr("!!x"), nodes.UnaryOperation("!", nodes.UnaryOperation("!", nodes.Identifier("x"))))
        self.assertEqual(parse_expr("kath_mone f()"),
                         nodes.AwaitExpression(nodes.FunctionCall(nodes.Identifier("f"), ())))

    def test_postfix_chain(self):
        expr = parse_expr("a.b[0](1).length")
        self.assertEqual(expr, nodes.MemberAccess(
            nodes.FunctionCall(
                nodes.IndexAccess(nodes.MemberAccess(nodes.Identifier("a"), "b"), nodes.NumberLiteral(0.0)),
                (nodes.NumberLiteral(1.0),)
            ),
            "length"
        ))

    def test_literals(self):
        self.assertEqual(parse_expr("[1, \"a\", sheriya,]"), nodes.ArrayLiteral(
            (nodes.NumberLiteral(1.0), nodes.StringLiteral("a"), nodes.BooleanLiteral(True))
        ))
        self.assertEqual(parse_expr("onnum_illa"), nodes.NullLiteral())
        self.assertEqual(parse_expr("[]"), nodes.ArrayLiteral(()))

    def test_object_literal(self):
        statement = parse_source("ith_aan o = {name: \"x\", \"full name\": 1, para: 2,}").statements[0]
        self.assertEqual(statement.value, nodes.ObjectLiteral((
            nodes.Property("name", nodes.StringLiteral("x")),
            nodes.Property("full name", nodes.NumberLiteral(1.0)),
            nodes.Property("para", nodes.NumberLiteral(2.0)),
        )))

    def test_assignment_targets(self):
        self.assertEqual(parse_expr("x = 1"), nodes.Assignment(nodes.Identifier("x"), nodes.NumberLiteral(1.0)))
        self.assertIsInstance(parse_expr("o.k = 1").target, nodes.MemberAccess)
        self.assertIsInstance(parse_expr("xs[0] = 1").target, nodes.IndexAccess)

    def test_function_declaration(self):
        statement = parse_expr("pani add2(a, b) { thirich_tha a + b }")
        self.assertEqual(statement.name, "add2")
        self.assertEqual(statement.params, ("a", "b"))
        self.assertFalse(statement.is_async)
        self.assertIsInstance(statement.body.statements[0], nodes.ReturnStatement)

        self.assertTrue(parse_expr("pinne_parayam pani f() { }").is_async)

    def test_empty_return(self):
        statement = parse_expr("pani f() { thirich_tha }")
        self.assertEqual(statement.body.statements, (nodes.ReturnStatement(None),))

    def test_if_chain(self):
        statement = parse_expr("seriyano (a) { para(1) } allelum (b) { para(2) } allelum (c) { } allengil { para(3) }")
        self.assertIsInstance(statement, nodes.IfStatement)
        self.assertEqual(len(statement.else_ifs), 2)
        self.assertEqual(statement.else_ifs[0].condition, nodes.Identifier("b"))
        self.assertIsNotNone(statement.else_block)

        self.assertIsNone(parse_expr("seriyano (a) { }").else_block)

    def test_loops(self):
        self.assertIsInstance(parse_expr("repeat_adi (3) { odaruth_mone }"), nodes.ForLoop)
        self.assertIsInstance(parse_expr("odi_repeat_mwone (x) { vitt_kala }"), nodes.WhileLoop)

    def test_break_outside_loop(self):
        for source in ["odaruth_mone", "vitt_kala", "repeat_adi (3) { pani f() { odaruth_mone } }"]:
            with self.assertRaises(ParseError, msg=source):
                parse_source(source)

    def test_return_outside_function(self):
        with self.assertRaises(ParseError) as context:
            parse_source("repeat_adi (2) { thirich_tha 1 }")
        self.assertEqual(context.exception.line, 1)

    def test_try_statement(self):
        statement = parse_expr("try_cheyth_nokk { } pidikk (e) { } ettavum_avasanam { }")
        self.assertEqual(statement.error_name, "e")
        self.assertIsNotNone(statement.handler)
        self.assertIsNotNone(statement.finalizer)

        statement = parse_expr("try_cheyth_nokk { } ettavum_avasanam { }")
        self.assertIsNone(statement.handler)

        with self.assertRaises(ParseError):
            parse_source("try_cheyth_nokk { }")

    def test_statements(self):
        self.assertEqual(parse_expr("theri_vili(\"x\")"), nodes.ThrowStatement(nodes.StringLiteral("x")))
        self.assertEqual(parse_expr("nee_po_mone_dinesha(x)"), nodes.DeleteStatement(nodes.Identifier("x"), False))
        self.assertEqual(parse_expr("sherikkum_pokkoda(x)"), nodes.DeleteStatement(nodes.Identifier("x"), True))
        self.assertEqual(parse_expr("adipoli_aan(x)"), nodes.AssertStatement(nodes.Identifier("x"), None))
        self.assertEqual(parse_expr("ith_manasilaayo(x, \"m\")"),
                         nodes.AssertStatement(nodes.Identifier("x"), nodes.StringLiteral("m")))
        self.assertEqual(parse_expr("enthada_ith(x)"), nodes.DebugStatement(nodes.Identifier("x")))
        self.assertEqual(parse_expr("log_cheyy(x)"), nodes.DebugStatement(nodes.Identifier("x")))
        self.assertEqual(parse_expr("kett_paranju(x)"), nodes.WarningStatement(nodes.Identifier("x")))
        self.assertEqual(parse_expr("scene_idd(10)"), nodes.SleepStatement(nodes.NumberLiteral(10.0)))
        self.assertEqual(parse_expr("chumma_iri_mone"), nodes.PassStatement())

    def test_wrappers(self):
        self.assertEqual(parse_expr("chodhik(\"?\")"), nodes.InputExpression(nodes.StringLiteral("?")))
        self.assertEqual(parse_expr("ithenthonn(x)"), nodes.TypeOfExpression(nodes.Identifier("x")))
        self.assertEqual(parse_expr("copy_adi(x)"), nodes.CopyExpression(nodes.Identifier("x")))
        self.assertEqual(parse_expr("ner_aano_mwone(x)"), nodes.TruthyCheckExpression(nodes.Identifier("x")))
        self.assertEqual(parse_expr("aalu_sheri_aano(x)"), nodes.ValidateExpression(nodes.Identifier("x")))

    def test_helper_calls(self):
        self.assertEqual(parse_expr("koottu(1, 2)"), nodes.FunctionCall(
            nodes.Identifier("add"), (nodes.NumberLiteral(1.0), nodes.NumberLiteral(2.0))
        ))
        self.assertEqual(parse_expr("push(xs, 1)").callee, nodes.Identifier("push"))
        self.assertEqual(parse_expr("join_pannuda(xs)").callee, nodes.Identifier("join"))
        self.assertEqual(parse_expr("random()"), nodes.FunctionCall(nodes.Identifier("random"), ()))

        with self.assertRaises(ParseError):
            parse_source("koottu(1)")

    def test_explicit_call(self):
        self.assertEqual(parse_expr("vili f(1)"), parse_expr("f(1)"))
        with self.assertRaises(ParseError):
            parse_source("vili f")

    def test_errors_are_positioned(self):
        with self.assertRaises(ParseError) as context:
            parse_source("ith_aan x = 1\nith_aan = 2")
        self.assertEqual(context.exception.msg, "Expected IDENTIFIER, got EQUALS")
        self.assertEqual((context.exception.line, context.exception.column), (2, 9))

        with self.assertRaises(ParseError) as context:
            parse_source("para(1")
        self.assertEqual(context.exception.msg, "Expected RPAREN, got EOF")

        with self.assertRaises(ParseError) as context:
            parse_source(")")
        self.assertEqual(context.exception.msg, "Unexpected token: RPAREN")

    def test_display(self):
        display = parse_source("para(1 + 2)").display()
        self.assertTrue(display.startswith("Program(nodes=["))
        self.assertIn("    PrintStatement(nodes=[", display)
        self.assertIn("BinaryOperation(operator='+', nodes=[", display)
        self.assertIn("NumberLiteral(value=1.0)", display)


if __name__ == '__main__':
    unittest.main()
