"""Tree-walking evaluator for Thenga Lang.

Statements evaluate to an Outcome: a value together with a control signal. Signal.NORMAL means evaluation continues
with the next statement; RETURN, BREAK and CONTINUE are handed back up by every enclosing rule until the construct
that handles them (a function call for RETURN, a loop for BREAK and CONTINUE). Expressions evaluate to plain values.
Runtime errors are raised as EvalError and can be caught by try_cheyth_nokk / pidikk.

Every node class has exactly one rule in the dispatch tables; the constructor checks that the tables cover the whole
closed set of nodes.
"""

import math
import random
from dataclasses import dataclass
from enum import Enum

from thenga.lang.error import EvalError
from thenga.runtime import operators
from thenga.runtime.builtins import make_builtins
from thenga.runtime.environment import Environment
from thenga.runtime.values import (
    Builtin, Closure, Delay, Pending, deep_copy, format_value, is_number, is_truthy, is_valid, type_name,
)
from thenga.syntax import nodes


class Signal(Enum):
    NORMAL = "normal"
    RETURN = "return"
    BREAK = "break"
    CONTINUE = "continue"


@dataclass(frozen=True)
class Outcome:
    """Result of evaluating a statement."""
    signal: Signal
    value: object = None

    @classmethod
    def normal(cls, value=None):
        return cls(Signal.NORMAL, value)

    @property
    def is_normal(self):
        return self.signal is Signal.NORMAL


BREAK = Outcome(Signal.BREAK)
CONTINUE = Outcome(Signal.CONTINUE)


class Evaluator:
    """Evaluates syntax trees. output_sink receives one line per para/enthada_ith/kett_paranju, input_source (if any)
    answers chodhik prompts synchronously and delay_handler (if any) is handed every scene_idd Delay.
    """
    LOOP_INDEX = "i"

    def __init__(self, output_sink=print, input_source=None, delay_handler=None, random_source=random.random):
        self.output_sink = output_sink
        self.input_source = input_source
        self.delay_handler = delay_handler
        self.random_source = random_source

        self.statement_rules = {
            nodes.Program: self.execute_block,
            nodes.Block: self.execute_block,
            nodes.VariableDeclaration: self.execute_variable_declaration,
            nodes.Assignment: self.execute_assignment,
            nodes.FunctionDeclaration: self.execute_function_declaration,
            nodes.ReturnStatement: self.execute_return,
            nodes.IfStatement: self.execute_if,
            nodes.WhileLoop: self.execute_while,
            nodes.ForLoop: self.execute_for,
            nodes.BreakStatement: lambda node, env: BREAK,
            nodes.ContinueStatement: lambda node, env: CONTINUE,
            nodes.TryStatement: self.execute_try,
            nodes.ThrowStatement: self.execute_throw,
            nodes.PrintStatement: self.execute_print,
            nodes.DeleteStatement: self.execute_delete,
            nodes.AssertStatement: self.execute_assert,
            nodes.DebugStatement: self.execute_debug,
            nodes.SleepStatement: self.execute_sleep,
            nodes.PassStatement: lambda node, env: Outcome.normal(),
            nodes.WarningStatement: self.execute_warning,
        }
        self.expression_rules = {
            nodes.NumberLiteral: lambda node, env: node.value,
            nodes.StringLiteral: lambda node, env: node.value,
            nodes.BooleanLiteral: lambda node, env: node.value,
            nodes.NullLiteral: lambda node, env: None,
            nodes.ArrayLiteral: lambda node, env: [self.evaluate(element, env) for element in node.elements],
            nodes.ObjectLiteral: self.evaluate_object,
            nodes.Identifier: lambda node, env: env.get(node.name),
            nodes.BinaryOperation: self.evaluate_binary,
            nodes.UnaryOperation: self.evaluate_unary,
            nodes.FunctionCall: self.evaluate_call,
            nodes.MemberAccess: self.evaluate_member,
            nodes.IndexAccess: self.evaluate_index,
            nodes.InputExpression: self.evaluate_input,
            nodes.TypeOfExpression: lambda node, env: type_name(self.evaluate(node.value, env)),
            nodes.CopyExpression: lambda node, env: deep_copy(self.evaluate(node.value, env)),
            nodes.ValidateExpression: lambda node, env: is_valid(self.evaluate(node.value, env)),
            nodes.TruthyCheckExpression: lambda node, env: is_truthy(self.evaluate(node.value, env)),
            nodes.AwaitExpression: lambda node, env: self.evaluate(node.value, env),
        }

        missing = set(nodes.STATEMENTS) - set(self.statement_rules)
        missing |= set(nodes.EXPRESSIONS) - set(self.expression_rules)
        if missing:
            names = ", ".join(sorted(cls.__name__ for cls in missing))
            raise EvalError(f"no evaluation rule for {names}", internal=True)

    # ==================== entry points ====================

    def new_globals(self):
        """Returns a global Environment seeded with the built-in functions."""
        env = Environment()
        for name, builtin in make_builtins(self.random_source).items():
            env.define(name, builtin)
        return env

    def interpret(self, tree):
        """Evaluates tree in a fresh global Environment and returns the final value."""
        return self.execute(tree, self.new_globals())

    def execute(self, tree, env):
        """Evaluates tree in env, a caller-owned global Environment, and returns the final value."""
        outcome = self.run(tree, env)
        if not outcome.is_normal:
            raise EvalError(f"unhandled '{outcome.signal.value}' signal at top level", internal=True)
        return outcome.value

    def run(self, node, env):
        """Evaluates node as a statement. Expressions in statement position produce a normal Outcome."""
        rule = self.statement_rules.get(type(node))
        if rule is not None:
            return rule(node, env)
        return Outcome.normal(self.evaluate(node, env))

    def evaluate(self, node, env):
        """Evaluates node as an expression and returns its value."""
        rule = self.expression_rules.get(type(node))
        if rule is None:
            raise EvalError(f"no evaluation rule for {type(node).__name__}", internal=True)
        return rule(node, env)

    # ==================== statements ====================

    def execute_block(self, node, env):
        """Runs statements in order. The value is that of the last statement; signals stop the block."""
        result = None
        for statement in node.statements:
            outcome = self.run(statement, env)
            if not outcome.is_normal:
                return outcome
            result = outcome.value
        return Outcome.normal(result)

    def execute_variable_declaration(self, node, env):
        value = self.evaluate(node.value, env)
        env.define(node.name, value, node.constant)
        return Outcome.normal(value)

    def execute_assignment(self, node, env):
        value = self.evaluate(node.value, env)
        target = node.target

        if isinstance(target, nodes.Identifier):
            env.set(target.name, value)

        elif isinstance(target, nodes.MemberAccess):
            obj = self.evaluate(target.object, env)
            if not isinstance(obj, dict):
                raise EvalError(f"Cannot set property '{target.property}' of {type_name(obj)}")
            obj[target.property] = value

        elif isinstance(target, nodes.IndexAccess):
            obj = self.evaluate(target.object, env)
            self.set_index(obj, self.evaluate(target.index, env), value)

        else:
            raise EvalError("Invalid assignment target")

        return Outcome.normal(value)

    def execute_function_declaration(self, node, env):
        closure = Closure(node.name, node.params, node.body, env, node.is_async)
        env.define(node.name, closure)
        return Outcome.normal(closure)

    def execute_return(self, node, env):
        value = self.evaluate(node.value, env) if node.value is not None else None
        return Outcome(Signal.RETURN, value)

    def execute_if(self, node, env):
        if is_truthy(self.evaluate(node.condition, env)):
            return self.run(node.then_block, env)

        for else_if in node.else_ifs:
            if is_truthy(self.evaluate(else_if.condition, env)):
                return self.run(else_if.block, env)

        if node.else_block is not None:
            return self.run(node.else_block, env)
        return Outcome.normal()

    def execute_while(self, node, env):
        """The condition and every iteration run in the enclosing environment."""
        result = None
        while is_truthy(self.evaluate(node.condition, env)):
            outcome = self.run(node.body, env)
            if outcome.signal is Signal.BREAK:
                break
            if outcome.signal is Signal.RETURN:
                return outcome
            if outcome.is_normal:
                result = outcome.value
        return Outcome.normal(result)

    def execute_for(self, node, env):
        """The bound is evaluated once; each iteration gets a fresh child environment binding the index."""
        times = self.evaluate(node.times, env)
        if not is_number(times) or math.isnan(times) or times < 0:
            raise EvalError("For loop requires a non-negative number")
        if math.isinf(times):
            raise EvalError("For loop requires a finite number")

        result = None
        for index in range(math.ceil(times)):
            iteration_env = Environment(env)
            iteration_env.define(Evaluator.LOOP_INDEX, float(index))

            outcome = self.run(node.body, iteration_env)
            if outcome.signal is Signal.BREAK:
                break
            if outcome.signal is Signal.RETURN:
                return outcome
            if outcome.is_normal:
                result = outcome.value
        return Outcome.normal(result)

    def execute_try(self, node, env):
        """Catch handles runtime errors only; signals pass through. The finalizer runs exactly once and replaces the
        outcome only if it fails itself or produces a signal.
        """
        outcome = Outcome.normal()
        failure = None
        try:
            try:
                outcome = self.run(node.body, env)
            except EvalError as error:
                if node.handler is None or error.internal:
                    raise
                handler_env = Environment(env)
                if node.error_name:
                    handler_env.define(node.error_name, error.msg)
                outcome = self.run(node.handler, handler_env)
        except Exception as error:
            if node.finalizer is None:
                raise
            failure = error

        if node.finalizer is not None:
            final = self.run(node.finalizer, env)
            if not final.is_normal:
                return final
        if failure is not None:
            raise failure
        return outcome

    def execute_throw(self, node, env):
        raise EvalError(format_value(self.evaluate(node.value, env)))

    def execute_print(self, node, env):
        self.output_sink(format_value(self.evaluate(node.value, env)))
        return Outcome.normal()

    def execute_debug(self, node, env):
        value = self.evaluate(node.value, env)
        self.output_sink(f"[DEBUG] {format_value(value)} (Type: {type_name(value)})")
        return Outcome.normal()

    def execute_warning(self, node, env):
        self.output_sink(f"[WARNING] {format_value(self.evaluate(node.message, env))}")
        return Outcome.normal()

    def execute_delete(self, node, env):
        if not isinstance(node.target, nodes.Identifier):
            raise EvalError("Can only delete variables")
        env.delete(node.target.name, node.force)
        return Outcome.normal(True)

    def execute_assert(self, node, env):
        if is_truthy(self.evaluate(node.condition, env)):
            return Outcome.normal()

        message = "Assertion failed"
        if node.message is not None:
            message = format_value(self.evaluate(node.message, env))
        raise EvalError(f"Assertion Error: {message}")

    def execute_sleep(self, node, env):
        """Produces a Delay for the host. The core itself never blocks."""
        duration = self.evaluate(node.duration, env)
        if not is_number(duration) or math.isnan(duration) or duration < 0:
            raise EvalError("Sleep duration must be a non-negative number")

        delay = Delay(float(duration))
        if self.delay_handler is not None:
            self.delay_handler(delay)
        return Outcome.normal(delay)

    # ==================== expressions ====================

    def evaluate_object(self, node, env):
        record = {}
        for prop in node.properties:
            record[prop.key] = self.evaluate(prop.value, env)
        return record

    def evaluate_binary(self, node, env):
        """&& and || return whichever operand decided the result, without evaluating the right one if not needed."""
        if node.operator == "&&":
            left = self.evaluate(node.left, env)
            return self.evaluate(node.right, env) if is_truthy(left) else left
        if node.operator == "||":
            left = self.evaluate(node.left, env)
            return left if is_truthy(left) else self.evaluate(node.right, env)

        left = self.evaluate(node.left, env)
        right = self.evaluate(node.right, env)
        return operators.apply_binary(node.operator, left, right)

    def evaluate_unary(self, node, env):
        return operators.apply_unary(node.operator, self.evaluate(node.operand, env))

    def evaluate_call(self, node, env):
        func = self.evaluate(node.callee, env)
        args = [self.evaluate(arg, env) for arg in node.args]
        return self.call(func, args, callee_name(node.callee))

    def call(self, func, args, name="<anonymous>"):
        """Calls a Builtin or a Closure with already evaluated args."""
        if isinstance(func, Builtin):
            func.check_arity(len(args))
            return func.impl(*args)

        if isinstance(func, Closure):
            if len(args) != len(func.params):
                raise EvalError(f"Function '{name}' expects {len(func.params)} arguments, got {len(args)}")

            call_env = Environment(func.env)
            for param, arg in zip(func.params, args):
                call_env.define(param, arg)

            outcome = self.run(func.body, call_env)
            if outcome.signal is Signal.RETURN:
                return outcome.value
            if not outcome.is_normal:
                raise EvalError(f"unhandled '{outcome.signal.value}' signal in function '{name}'", internal=True)
            return None

        raise EvalError(f"'{name}' is not a function")

    def evaluate_member(self, node, env):
        obj = self.evaluate(node.object, env)
        if obj is None:
            raise EvalError(f"Cannot access property '{node.property}' of {format_value(obj)}")
        if isinstance(obj, dict):
            return obj.get(node.property)
        if isinstance(obj, (list, str)) and node.property == "length":
            return float(len(obj))
        raise EvalError(f"Cannot access property '{node.property}' of {type_name(obj)}")

    def evaluate_index(self, node, env):
        obj = self.evaluate(node.object, env)
        index = self.evaluate(node.index, env)
        if obj is None:
            raise EvalError(f"Cannot access index of {format_value(obj)}")

        if isinstance(obj, dict):
            return obj.get(record_key(index))
        if isinstance(obj, (list, str)):
            position = sequence_position(index)
            if position is None or position >= len(obj):
                return None
            return obj[position]
        raise EvalError(f"Cannot index into {type_name(obj)}")

    def set_index(self, obj, index, value):
        if isinstance(obj, dict):
            obj[record_key(index)] = value
            return
        if not isinstance(obj, list):
            raise EvalError(f"Cannot set index of {type_name(obj)}")

        position = sequence_position(index)
        if position is None:
            raise EvalError(f"Invalid array index: {format_value(index)}")
        if position >= len(obj):
            obj.extend([None] * (position - len(obj) + 1))
        obj[position] = value

    def evaluate_input(self, node, env):
        """Asks input_source synchronously, or returns a Pending placeholder for the host to resolve."""
        prompt = format_value(self.evaluate(node.prompt, env))
        if self.input_source is not None:
            return self.input_source(prompt)
        return Pending(prompt)


def callee_name(node):
    if isinstance(node, nodes.Identifier):
        return node.name
    if isinstance(node, nodes.MemberAccess):
        return node.property
    return "<anonymous>"


def record_key(index):
    return index if isinstance(index, str) else format_value(index)


def sequence_position(index):
    """Non-negative integral numbers address sequence items; anything else addresses nothing."""
    if not is_number(index) or math.isnan(index) or math.isinf(index):
        return None
    if index < 0 or not float(index).is_integer():
        return None
    return int(index)
