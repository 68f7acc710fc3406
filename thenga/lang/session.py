"""Session control for Thenga Lang. Host-facing entry points that take source text through the scanner, the parser and
the evaluator, either once (tokenize/parse/run) or repeatedly against one global environment (Session).

Every entry point only ever raises LexicalError, ParseError or EvalError.
"""

from thenga.lang.error import GenericException, classify_errors
from thenga.runtime.evaluator import Evaluator
from thenga.syntax import parser, scanner


def read_source(path):
    try:
        with open(path, "r", encoding="utf-8") as file:
            return file.read()
    except OSError:
        raise GenericException(f"'{path}' could not be opened")


def tokenize(source):
    """Returns the token list of source, ending in EOF."""
    with classify_errors():
        return scanner.tokenize(source)


def parse(source):
    """Returns the Program tree of source."""
    with classify_errors():
        return parser.parse(scanner.tokenize(source))


def run(source, output_sink=print, input_source=None, delay_handler=None):
    """Evaluates source in a fresh global environment and returns the value of its last statement."""
    with classify_errors():
        tree = parser.parse(scanner.tokenize(source))
        evaluator = Evaluator(output_sink, input_source, delay_handler)
        return evaluator.interpret(tree)


class Session:
    """Governs a Thenga session: one evaluator and one global environment that outlive individual runs."""
    SH_FILE = "<in>"  # interactive input filename

    def __init__(self, error_handler, output_sink=print, input_source=None, delay_handler=None):
        self.error_handler = error_handler
        self.evaluator = Evaluator(output_sink, input_source, delay_handler)
        self.globals = self.evaluator.new_globals()

    def run(self, source, path=SH_FILE):
        """Runs source against the session globals. Declarations persist for later runs, even if this one fails."""
        self.error_handler.register_source(path, source)
        with classify_errors():
            tree = parser.parse(scanner.tokenize(source))
            return self.evaluator.execute(tree, self.globals)

    def run_file(self, path):
        return self.run(read_source(path), path)

    def reset(self):
        """Forgets every declaration made in this session."""
        self.globals = self.evaluator.new_globals()
