"""Handles interactive mode for the Thenga interpreter. Uses cmd as backend."""

import cmd

from termcolor import colored

from thenga.runtime.values import format_value

EXAMPLES = (
    ("Hello World", 'para("Enthaada mone!");'),
    ("Variables", 'ith_aan x = 10;\nith_fixed_aan name = "Machan";\npara(name);'),
    ("Conditionals", 'ith_aan age = 25;\nseriyano(age velliya 18) {\n    para("You can vote mone!");\n'
                     '} allengil {\n    para("Too young machan");\n}'),
    ("Loops", 'repeat_adi(5) {\n    para("Iteration " + i);\n}'),
    ("Functions", 'pani greet(name) {\n    thirich_tha("Hello " + name);\n}\npara(greet("Mone"));'),
    ("Arrays", "ith_aan numbers = [1, 2, 3, 4, 5];\npara(numbers[0]);"),
    ("Errors", 'try_cheyth_nokk {\n    theri_vili("pani paali");\n} pidikk (e) {\n    para("Caught: " + e);\n}'),
)


def show_examples():
    """Prints the example programs."""
    print(colored("Thenga Lang examples:\n", "cyan", attrs=["bold"]))
    for num, (title, code) in enumerate(EXAMPLES):
        print(colored(f"{num + 1}. {title}:", "yellow"))
        for line in code.splitlines():
            print(colored(f"   {line}", "dark_grey"))
        print()


def print_output(line):
    """Output sink of the command line: diagnostics lines are colored, everything else is printed as is."""
    if line.startswith("[WARNING]"):
        print(colored(line, "magenta"))
    elif line.startswith("[DEBUG]"):
        print(colored(line, "dark_grey"))
    else:
        print(line)


class Shell(cmd.Cmd):
    """Thenga interpreter shell. Input is buffered until its braces balance, then run in the session."""
    intro = "Thenga Lang interpreter :: Python backend\nType 'help' for more information."
    prompt = "thenga> "
    secondary_prompt = "...   > "  # used for line continuations
    _tmp_prompt = "thenga> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.depth = 0

    def onecmd(self, line):
        """Lines continuing a buffered statement are never commands."""
        if self._tmp_line and line != "EOF":
            return self.default(line)
        return super().onecmd(line)

    def default(self, line):
        """Executes arbitrary Thenga code."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self._tmp_line += line + "\n"
            self.depth += line.count("{") - line.count("}")

            if self.depth > 0:
                self.prompt = self.secondary_prompt
                return

            source = self._tmp_line
            self._tmp_line = ""
            self.depth = 0
            self.prompt = self._tmp_prompt

            if not source.strip():
                return

            result = self.sess.run(source)
            if result is not None:
                print(colored("→", "green"), format_value(result))

    def do_help(self, arg):
        """Prints a short guide instead of the generated command docs."""
        print("Welcome to the Thenga Lang interpreter!\n\n"
              "Type Thenga code and press Enter. Blocks spanning several lines are run once their braces\n"
              "are closed. Declarations are kept for the rest of the session.\n\n"
              "Commands:\n"
              "  help       show this message\n"
              "  clear      clear the screen\n"
              "  examples   show code examples\n"
              "  exit/quit  exit the interpreter")

    def do_clear(self, arg):
        """Clears the screen."""
        print("\033[2J\033[H", end="")

    def do_examples(self, arg):
        """Shows code examples."""
        show_examples()

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        if self._tmp_line.strip():
            self.sess.error_handler.warn("unterminated input discarded")
        return self.do_exit("")

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            self.sess.error_handler.warn(f"Unrecognized token: '{arg}'")
            return False
        print(colored("Poda mone! Bye!", "cyan"))
        return True

    do_quit = do_exit
