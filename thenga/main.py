"""Runs Thenga Lang files, starts the interactive shell or dumps tokens and trees of a file for debugging. Also uses the
error handling context manager. Called from the thenga executable script.
"""

import argparse
import time

from termcolor import colored

from thenga.lang.error import ErrorHandler
from thenga.lang.session import Session, parse, read_source, tokenize
from thenga.lang.shell import Shell, print_output, show_examples

VERSION = "1.0.0"


def build_parser():
    parser = argparse.ArgumentParser(prog="thenga", description="Thenga Lang - Malayalam programming language")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    commands = parser.add_subparsers(dest="command")

    run = commands.add_parser("run", help="run a Thenga Lang file")
    run.add_argument("file", help="file to interpret and run")
    run.add_argument("--no-sleep", action="store_true", help="do not wait on scene_idd")

    commands.add_parser("repl", help="start the interactive shell (default)")

    tokens = commands.add_parser("tokenize", help="show the tokens of a Thenga Lang file")
    tokens.add_argument("file")

    tree = commands.add_parser("parse", help="show the syntax tree of a Thenga Lang file")
    tree.add_argument("file")

    commands.add_parser("examples", help="show Thenga Lang examples")
    return parser


def read_input(prompt):
    return input(f"{prompt} ")


def wait(delay):
    time.sleep(delay.milliseconds / 1000)


def main(argv=None):
    """Runs the Thenga interpreter. Called from the thenga executable script."""
    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)

        if args.command == "run":
            delay_handler = None if args.no_sleep else wait
            sess = Session(error_handler, print_output, read_input, delay_handler)
            print(colored(f"Running: {args.file}\n", "cyan"))
            sess.run_file(args.file)

        elif args.command == "tokenize":
            source = read_source(args.file)
            error_handler.register_source(args.file, source)

            print(colored("Tokens:\n", "cyan"))
            for index, token in enumerate(tokenize(source)):
                print(f"{colored(f'{index:>3}', 'dark_grey')}: {colored(f'{token.type.name:<20}', 'yellow')} "
                      f"{token.value!r}")

        elif args.command == "parse":
            source = read_source(args.file)
            error_handler.register_source(args.file, source)

            print(colored("Syntax tree:\n", "cyan"))
            print(parse(source).display())

        elif args.command == "examples":
            show_examples()

        else:
            error_handler.fatal = False
            Shell(Session(error_handler, print_output, read_input, wait)).cmdloop()


if __name__ == "__main__":
    main()
