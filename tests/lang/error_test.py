import io
import re
import unittest
from contextlib import redirect_stdout

from thenga.lang.error import ErrorHandler, EvalError, GenericException, LexicalError, ParseError, classify_errors

ANSI = re.compile(r"\x1b\[[0-9;]*m")


def plain(text):
    return ANSI.sub("", text)


class GenericExceptionTestCase(unittest.TestCase):

    def test_str(self):
        self.assertEqual(str(ParseError("Expected RPAREN, got EOF", 2, 7)),
                         "syntax error at 2:7 - Expected RPAREN, got EOF")
        self.assertEqual(str(EvalError("Division by zero")), "runtime error: Division by zero")
        self.assertEqual(str(LexicalError("Unterminated string", 1, 1)), "lexical error at 1:1 - Unterminated string")

    def test_kinds(self):
        for kind in [LexicalError, ParseError, EvalError]:
            self.assertTrue(issubclass(kind, GenericException))
        self.assertFalse(EvalError("x").internal)
        self.assertFalse(EvalError("x").positioned)


class ClassifyErrorsTestCase(unittest.TestCase):

    def test_thenga_errors_pass_through(self):
        with self.assertRaises(ParseError):
            with classify_errors():
                raise ParseError("bad")

    def test_unexpected_errors_are_wrapped(self):
        with self.assertRaises(EvalError) as context:
            with classify_errors():
                raise KeyError("k")
        self.assertTrue(context.exception.internal)
        self.assertTrue(context.exception.msg.startswith("Runtime error: "))

    def test_recursion(self):
        with self.assertRaises(EvalError) as context:
            with classify_errors():
                raise RecursionError()
        self.assertEqual(context.exception.msg, "maximum recursion depth exceeded")
        self.assertFalse(context.exception.internal)


class ErrorHandlerTestCase(unittest.TestCase):

    def setUp(self):
        self.error_handler = ErrorHandler(fatal=False)
        self.error_handler.register_source("hello.thenga", "ith_aan x = 1\npara(y)\n")

    def report(self, error):
        out = io.StringIO()
        with redirect_stdout(out):
            with self.error_handler:
                raise error
        return plain(out.getvalue())

    def test_throw_with_diagnosis(self):
        out = self.report(EvalError("Undefined variable: 'y'", 2, 6))
        self.assertIn("hello.thenga:2:6: runtime error: Undefined variable: 'y'", out)
        self.assertIn("  para(y)\n", out)
        self.assertIn("       ^", out)

    def test_throw_without_position(self):
        out = self.report(EvalError("Division by zero"))
        self.assertIn("hello.thenga: runtime error: Division by zero", out)
        self.assertNotIn("^", out)

    def test_internal_errors(self):
        out = self.report(EvalError("no evaluation rule for Property", internal=True))
        self.assertIn("[internal] runtime error: no evaluation rule for Property", out)

    def test_unknown_errors(self):
        out = io.StringIO()
        with redirect_stdout(out):
            with self.assertRaises(ValueError):
                with self.error_handler:
                    raise ValueError("strange")
        self.assertIn("unknown error: 'ValueError: strange'", plain(out.getvalue()))

    def test_reset_after_non_fatal_error(self):
        self.report(ParseError("Unexpected token: RPAREN", 1, 1))
        self.assertIsNone(self.error_handler.path)
        self.assertEqual(self.error_handler.lines, [])

    def test_fatal_exits(self):
        error_handler = ErrorHandler()
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as context:
                with error_handler:
                    raise EvalError("boom")
        self.assertEqual(context.exception.code, 1)

    def test_diagnose_out_of_range(self):
        self.assertIsNone(self.error_handler.diagnose(EvalError("x", 10, 1)))

    def test_warn(self):
        out = io.StringIO()
        with redirect_stdout(out):
            self.error_handler.warn("careful")
        self.assertEqual(plain(out.getvalue()), "warning: careful\n")


if __name__ == '__main__':
    unittest.main()
