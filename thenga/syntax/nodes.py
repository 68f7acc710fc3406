"""Syntax tree of Thenga Lang. Nodes are immutable dataclasses owned by their parent; children are held in tuples.

The set of variants is closed: STATEMENTS and EXPRESSIONS list every node the parser can emit, and the evaluator
refuses to start unless it has a rule for each of them. Clauses (object properties, else-if branches) are parts of a
parent node and are never evaluated on their own.
"""

from dataclasses import dataclass, fields
from typing import Optional, Tuple


class Node:
    """Base of every syntax tree shape."""

    def display(self, indents=0):
        """Recursively displays the tree in a readable format.

        Format:
        <Node>(<field>=<value>, nodes=[
            <Node>(<field>=<value>, nodes=[
                ...
                <Node>(<field>=<value>)  # <-- if there are no child nodes
            ])
        ])
        """
        attrs = []
        children = []
        for field in fields(self):
            value = getattr(self, field.name)
            nested = _child_nodes(value)
            if nested is None:
                attrs.append(f"{field.name}={value!r}")
            else:
                children.extend(nested)

        result = f"{'    ' * indents}{type(self).__name__}({', '.join(attrs)}"
        if children:
            result += ", " if attrs else ""
            result += "nodes=["
            for child in children:
                result += "\n" + child.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"


def _child_nodes(value):
    """Returns the nodes held by a field value, or None if the field holds plain data."""
    if isinstance(value, Node):
        return [value]
    if isinstance(value, tuple) and value and all(isinstance(item, Node) for item in value):
        return list(value)
    return None


class Statement(Node):
    """Node evaluated for its effect; may produce a control signal."""


class Expression(Node):
    """Node evaluated to a value."""


class Clause(Node):
    """Part of a parent node with no evaluation rule of its own."""


# ==================== expressions ====================

@dataclass(frozen=True)
class NumberLiteral(Expression):
    value: float


@dataclass(frozen=True)
class StringLiteral(Expression):
    value: str


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    value: bool


@dataclass(frozen=True)
class NullLiteral(Expression):
    pass


@dataclass(frozen=True)
class ArrayLiteral(Expression):
    elements: Tuple[Expression, ...]


@dataclass(frozen=True)
class Property(Clause):
    key: str
    value: Expression


@dataclass(frozen=True)
class ObjectLiteral(Expression):
    properties: Tuple[Property, ...]


@dataclass(frozen=True)
class Identifier(Expression):
    name: str


@dataclass(frozen=True)
class BinaryOperation(Expression):
    left: Expression
    operator: str
    right: Expression


@dataclass(frozen=True)
class UnaryOperation(Expression):
    operator: str
    operand: Expression


@dataclass(frozen=True)
class FunctionCall(Expression):
    callee: Expression
    args: Tuple[Expression, ...]


@dataclass(frozen=True)
class MemberAccess(Expression):
    object: Expression
    property: str


@dataclass(frozen=True)
class IndexAccess(Expression):
    object: Expression
    index: Expression


@dataclass(frozen=True)
class InputExpression(Expression):
    prompt: Expression


@dataclass(frozen=True)
class TypeOfExpression(Expression):
    value: Expression


@dataclass(frozen=True)
class CopyExpression(Expression):
    value: Expression


@dataclass(frozen=True)
class ValidateExpression(Expression):
    value: Expression


@dataclass(frozen=True)
class TruthyCheckExpression(Expression):
    value: Expression


@dataclass(frozen=True)
class AwaitExpression(Expression):
    value: Expression


# ==================== statements ====================

@dataclass(frozen=True)
class Program(Statement):
    statements: Tuple[Node, ...]


@dataclass(frozen=True)
class Block(Statement):
    statements: Tuple[Node, ...]


@dataclass(frozen=True)
class VariableDeclaration(Statement):
    name: str
    value: Expression
    constant: bool = False


@dataclass(frozen=True)
class Assignment(Statement):
    target: Expression
    value: Expression


@dataclass(frozen=True)
class FunctionDeclaration(Statement):
    name: str
    params: Tuple[str, ...]
    body: Block
    is_async: bool = False


@dataclass(frozen=True)
class ReturnStatement(Statement):
    value: Optional[Expression] = None


@dataclass(frozen=True)
class ElseIf(Clause):
    condition: Expression
    block: Block


@dataclass(frozen=True)
class IfStatement(Statement):
    condition: Expression
    then_block: Block
    else_ifs: Tuple[ElseIf, ...] = ()
    else_block: Optional[Block] = None


@dataclass(frozen=True)
class WhileLoop(Statement):
    condition: Expression
    body: Block


@dataclass(frozen=True)
class ForLoop(Statement):
    times: Expression
    body: Block


@dataclass(frozen=True)
class BreakStatement(Statement):
    pass


@dataclass(frozen=True)
class ContinueStatement(Statement):
    pass


@dataclass(frozen=True)
class TryStatement(Statement):
    body: Block
    handler: Optional[Block] = None
    error_name: Optional[str] = None
    finalizer: Optional[Block] = None


@dataclass(frozen=True)
class ThrowStatement(Statement):
    value: Expression


@dataclass(frozen=True)
class PrintStatement(Statement):
    value: Expression


@dataclass(frozen=True)
class DeleteStatement(Statement):
    target: Expression
    force: bool = False


@dataclass(frozen=True)
class AssertStatement(Statement):
    condition: Expression
    message: Optional[Expression] = None


@dataclass(frozen=True)
class DebugStatement(Statement):
    value: Expression


@dataclass(frozen=True)
class SleepStatement(Statement):
    duration: Expression


@dataclass(frozen=True)
class PassStatement(Statement):
    pass


@dataclass(frozen=True)
class WarningStatement(Statement):
    message: Expression


STATEMENTS = (
    Program, Block, VariableDeclaration, Assignment, FunctionDeclaration, ReturnStatement, IfStatement, WhileLoop,
    ForLoop, BreakStatement, ContinueStatement, TryStatement, ThrowStatement, PrintStatement, DeleteStatement,
    AssertStatement, DebugStatement, SleepStatement, PassStatement, WarningStatement,
)

EXPRESSIONS = (
    NumberLiteral, StringLiteral, BooleanLiteral, NullLiteral, ArrayLiteral, ObjectLiteral, Identifier,
    BinaryOperation, UnaryOperation, FunctionCall, MemberAccess, IndexAccess, InputExpression, TypeOfExpression,
    CopyExpression, ValidateExpression, TruthyCheckExpression, AwaitExpression,
)
