"""AST helpers for code generation.

This module provides small builders for the Python AST nodes used by the
node renderer and the script assembler.
"""

import ast
from collections.abc import Iterable

__all__ = [
    '_name',
    '_attr',
    '_argument',
    '_assign',
    '_call',
    '_func',
    '_class',
    '_docstring',
    '_property',
    '_concat',
    '_all',
    'unparse',
]


def _name(name: str) -> ast.Name:
    return ast.Name(id=name, ctx=ast.Load())


def _attr(value: str | ast.expr, attr: str) -> ast.Attribute:
    return ast.Attribute(
        value=_name(value) if isinstance(value, str) else value,
        attr=attr,
        ctx=ast.Load(),
    )


def _argument(name: str, value: ast.expr | None = None) -> ast.arg:
    return ast.arg(
        arg=name,
        annotation=value,
    )


def _assign(target: ast.expr, value: ast.expr) -> ast.Assign:
    # Ensure target has Store context
    if isinstance(target, ast.Name):
        target = ast.Name(id=target.id, ctx=ast.Store())
    elif isinstance(target, ast.Attribute):
        # For attributes, only the outermost needs Store context
        target.ctx = ast.Store()
    return ast.Assign(
        targets=[target],
        value=value,
    )


def _call(
    func: ast.expr,
    args: list[ast.expr] | None = None,
    keywords: list[ast.keyword] | None = None,
) -> ast.Call:
    return ast.Call(
        func=func,
        args=args or [],
        keywords=keywords or [],
    )


def _func(
    name: str,
    args: list[ast.arg],
    body: list[ast.stmt],
    returns: ast.expr | None = None,
    defaults: list[ast.expr] | None = None,
    decorators: list[ast.expr] | None = None,
) -> ast.FunctionDef:
    return ast.FunctionDef(
        name=name,
        args=ast.arguments(
            posonlyargs=[],
            args=args,
            kwonlyargs=[],
            kw_defaults=[],
            defaults=defaults or [],
        ),
        body=body,
        decorator_list=decorators or [],
        returns=returns,
        type_params=[],
    )


def _docstring(text: str) -> ast.Expr:
    return ast.Expr(value=ast.Constant(value=text))


def _class(
    name: str,
    body: list[ast.stmt],
    bases: list[str] | None = None,
    docstring: str | None = None,
) -> ast.ClassDef:
    if docstring:
        body = [_docstring(docstring)] + body
    return ast.ClassDef(
        name=name,
        bases=[_name(base) for base in bases or []],
        keywords=[],
        body=body or [ast.Pass()],
        decorator_list=[],
        type_params=[],
    )


def _property(name: str, body: list[ast.stmt]) -> ast.FunctionDef:
    return _func(
        name=name,
        args=[_argument('self')],
        body=body,
        decorators=[_name('property')],
    )


def _concat(*parts: ast.expr) -> ast.expr:
    # a + b + c, left associative
    result = parts[0]
    for part in parts[1:]:
        result = ast.BinOp(left=result, op=ast.Add(), right=part)
    return result


def _all(names: Iterable[str]) -> ast.Assign:
    return _assign(
        target=_name('__all__'),
        value=ast.Tuple(
            elts=[ast.Constant(value=name) for name in names], ctx=ast.Load()
        ),
    )


def unparse(body: list[ast.stmt]) -> str:
    """Turn a list of statements into source text."""
    module = ast.Module(body=body, type_ignores=[])
    ast.fix_missing_locations(module)
    return ast.unparse(module)
