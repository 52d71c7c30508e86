"""Visitor pattern for expression tree traversal.

Enables tools to walk compiled expression trees without modifying node
classes.

NOTE: This module follows Python stdlib ast.NodeVisitor naming convention.
Methods are named visit_NodeName (PascalCase) rather than visit_node_name
(snake_case), matching Python's AST visitor pattern.
See: https://docs.python.org/3/library/ast.html#ast.NodeVisitor

Trees built by the replacement compiler share sub-expressions (the running
search offset is reused by every later step). Visitors walk them as trees,
so shared nodes are visited once per occurrence, exactly as they appear in
serialized JSON.

Python 3.13+.
"""

from collections.abc import Iterator
from typing import ClassVar

from maplabels.constants import MAX_DEPTH
from maplabels.core.depth_guard import DepthGuard
from maplabels.enums import Operator

from .ast import Call, Expression, LexicalBinding

__all__ = [
    "DepthVisitor",
    "ExpressionVisitor",
    "FieldCollector",
    "expression_depth",
    "iter_children",
    "referenced_fields",
]


def iter_children(node: Expression) -> Iterator[Expression]:
    """Yield direct child expressions in serialized order."""
    match node:
        case Call(args=args):
            yield from args
        case LexicalBinding(bindings=bindings, body=body):
            yield from bindings.values()
            yield body
        case _:
            return


class ExpressionVisitor[T = object]:
    """Base visitor for traversing expression trees.

    generic_visit() traverses all child nodes. Override visit_NodeType
    methods to add custom behavior.

    Uses a class-level dispatch table built once per subclass via
    __init_subclass__.

    Example:
        >>> class CountCalls(ExpressionVisitor):
        ...     def __init__(self):
        ...         super().__init__()
        ...         self.count = 0
        ...
        ...     def visit_Call(self, node):
        ...         self.count += 1
        ...         return self.generic_visit(node)
    """

    __slots__ = ("_depth_guard",)

    _class_visit_methods: ClassVar[dict[str, str]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Build class-level dispatch table when subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._class_visit_methods = {}
        for name in dir(cls):
            if name.startswith("visit_") and name != "visit":
                cls._class_visit_methods[name[6:]] = name

    def __init__(self, *, max_depth: int | None = None) -> None:
        """Initialize visitor with depth guard.

        Subclasses MUST call super().__init__().

        Args:
            max_depth: Maximum traversal depth (default: MAX_DEPTH).
        """
        self._depth_guard = DepthGuard(
            max_depth=max_depth if max_depth is not None else MAX_DEPTH
        )

    def visit(self, node: Expression) -> T:
        """Dispatch to visit_<NodeType>, or generic_visit if undefined."""
        with self._depth_guard:
            method_name = self._class_visit_methods.get(type(node).__name__)
            if method_name is None:
                return self.generic_visit(node)
            return getattr(self, method_name)(node)  # type: ignore[no-any-return]

    def generic_visit(self, node: Expression) -> T:
        """Visit all children; returns the node itself."""
        for child in iter_children(node):
            self.visit(child)
        return node  # type: ignore[return-value]


class DepthVisitor(ExpressionVisitor[Expression]):
    """Measures nesting depth as the deepest level its walk enters.

    Leaves count as depth 1.
    """

    __slots__ = ()

    def measure(self, node: Expression) -> int:
        """Walk the whole tree and return its depth."""
        self.visit(node)
        return self._depth_guard.deepest


class FieldCollector(ExpressionVisitor[None]):
    """Collects feature property names read through ["get", name]."""

    __slots__ = ("fields",)

    def __init__(self, *, max_depth: int | None = None) -> None:
        super().__init__(max_depth=max_depth)
        self.fields: dict[str, None] = {}

    def visit_Call(self, node: Call) -> None:
        if node.operator == Operator.GET and node.args:
            field = getattr(node.args[0], "value", None)
            if isinstance(field, str):
                self.fields.setdefault(field)
        for arg in node.args:
            self.visit(arg)


def expression_depth(node: Expression, *, max_depth: int | None = None) -> int:
    """Return the nesting depth of an expression tree.

    Literal and variable leaves have depth 1; every call or binding adds
    one level above its deepest child.
    """
    return DepthVisitor(max_depth=max_depth).measure(node)


def referenced_fields(node: Expression) -> tuple[str, ...]:
    """Return feature property names the tree reads, in first-seen order."""
    collector = FieldCollector()
    collector.visit(node)
    return tuple(collector.fields)
