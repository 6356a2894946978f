"""Node renderer interface and implementations.

A NodeRenderer turns one NodeContext into the source text of its code
unit: a collection accessor class and, when the node captures a path
parameter, an item accessor class.

Two implementations are provided:
    - AstNodeRenderer builds the classes as Python AST and unparses them.
    - TemplateNodeRenderer renders a Jinja2 template with a ``method``
      helper that yields the source of one verb method.
"""

import ast
from abc import ABC, abstractmethod
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from apitree.codegen.ast_utils import (
    _argument,
    _assign,
    _attr,
    _call,
    _class,
    _concat,
    _func,
    _name,
    _property,
    unparse,
)
from apitree.codegen.types import ChildAccessor, NodeContext

__all__ = [
    'AstNodeRenderer',
    'BODYLESS_METHODS',
    'COLLECTION_PATH',
    'ITEM_PATH',
    'NodeRenderer',
    'TEMPLATE_DIR',
    'TemplateNodeRenderer',
    'method_source',
]

TEMPLATE_DIR = Path(__file__).parent / 'templates'

# Verbs whose generated method takes no request body
BODYLESS_METHODS = frozenset({'get'})

COLLECTION_PATH = 'self._path'
ITEM_PATH = "self._path + '/' + self._param"


class NodeRenderer(ABC):
    """Abstract base class for node renderers."""

    @abstractmethod
    def render(self, node: NodeContext) -> str:
        """Render the code unit for one node.

        Args:
            node: The resolved node context.

        Returns:
            Python source text of the node's accessor class(es).
        """
        pass


def method_source(method: str, path_expr: str) -> str:
    """Return the source of the accessor method for one HTTP verb.

    Args:
        method: Lowercase HTTP verb, e.g. ``get`` or ``post``.
        path_expr: Source expression of the request path, e.g. ``self._path``.

    Example:
        >>> print(method_source('post', 'self._path'))
        def post(self, body=None):
            return _post(self._options, body, self._path)
    """
    if method in BODYLESS_METHODS:
        return (
            f'def {method}(self):\n'
            f'    return _{method}(self._options, {path_expr})'
        )
    return (
        f'def {method}(self, body=None):\n'
        f'    return _{method}(self._options, body, {path_expr})'
    )


class AstNodeRenderer(NodeRenderer):
    """Renders node classes by building and unparsing Python AST."""

    def render(self, node: NodeContext) -> str:
        body: list[ast.stmt] = [self._collection_class(node)]
        if node.item_class_name:
            body.append(self._item_class(node))
        return unparse(body)

    def _collection_class(self, node: NodeContext) -> ast.ClassDef:
        path = _attr('self', '_path')
        body: list[ast.stmt] = []

        for child in node.children:
            body.extend(self._child_accessor(child, path))
        for method in node.methods:
            body.append(self._method(method, path))

        if node.item_class_name:
            body.append(
                _func(
                    name='__call__',
                    args=[_argument('self'), _argument(node.parameter_arg)],
                    body=[
                        ast.Return(
                            value=_call(
                                _name(node.item_class_name),
                                args=[
                                    _attr('self', '_options'),
                                    _attr('self', '_path'),
                                    _name(node.parameter_arg),
                                ],
                            )
                        )
                    ],
                )
            )

        return _class(
            node.class_name,
            body,
            bases=['_Resource'],
            docstring=node.description,
        )

    def _item_class(self, node: NodeContext) -> ast.ClassDef:
        path = _concat(
            _attr('self', '_path'), ast.Constant(value='/'), _attr('self', '_param')
        )
        body: list[ast.stmt] = []

        for child in node.children:
            body.extend(self._child_accessor(child, path))
        for method in node.parameter_methods:
            body.append(self._method(method, path))

        return _class(
            node.item_class_name,
            body,
            bases=['_Item'],
            docstring=node.item_description,
        )

    def _child_accessor(
        self, child: ChildAccessor, path: ast.expr
    ) -> list[ast.stmt]:
        accessor = _property(
            child.attribute,
            [
                ast.Return(
                    value=_call(
                        _name(child.class_name),
                        args=[
                            _attr('self', '_options'),
                            _concat(path, ast.Constant(value=child.path)),
                        ],
                    )
                )
            ],
        )
        aliases = [_assign(_name(alias), _name(child.attribute)) for alias in child.aliases]
        return [accessor, *aliases]

    def _method(self, method: str, path: ast.expr) -> ast.FunctionDef:
        if method in BODYLESS_METHODS:
            args = [_argument('self')]
            defaults = []
            call_args = [_attr('self', '_options'), path]
        else:
            args = [_argument('self'), _argument('body')]
            defaults = [ast.Constant(value=None)]
            call_args = [_attr('self', '_options'), _name('body'), path]

        return _func(
            name=method,
            args=args,
            defaults=defaults,
            body=[ast.Return(value=_call(_name(f'_{method}'), args=call_args))],
        )


class TemplateNodeRenderer(NodeRenderer):
    """Renders node classes from a Jinja2 template.

    The template receives the NodeContext as ``node`` together with the
    ``collection_path`` and ``item_path`` expressions, and can call
    ``method(verb, path_expr)`` to emit a verb method.

    Example:
        >>> renderer = TemplateNodeRenderer()
        >>> source = renderer.render(context)
    """

    def __init__(
        self,
        template_dir: str | Path | None = None,
        template_name: str = 'resource.py.jinja',
    ):
        """Initialize the template renderer.

        Args:
            template_dir: Directory holding the template. Defaults to the
                templates shipped with apitree.
            template_name: File name of the node template.
        """
        self.env = _create_jinja_env(template_dir or TEMPLATE_DIR)
        self.template = self.env.get_template(template_name)

    def render(self, node: NodeContext) -> str:
        return self.template.render(
            node=node,
            collection_path=COLLECTION_PATH,
            item_path=ITEM_PATH,
        ).strip()


def _create_jinja_env(template_dir: str | Path) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    env.globals['method'] = method_source
    env.filters['docstring'] = _escape_docstring
    return env


def _escape_docstring(text: str) -> str:
    return text.replace('\\', '\\\\').replace('"', '\\"')
