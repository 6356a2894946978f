"""Assembly of the generated client module.

The ScriptAssembler wraps the emitted accessor classes with a fixed
preamble (the request function, one helper per HTTP verb and the accessor
base classes) and an epilogue exporting the ``Client`` root accessor.
"""

import ast

from apitree.codegen.ast_utils import (
    _all,
    _argument,
    _call,
    _docstring,
    _func,
    _name,
    unparse,
)
from apitree.codegen.renderers import BODYLESS_METHODS
from apitree.codegen.types import ROOT_CLASS_NAME
from apitree.codegen.utils import HTTP_METHODS

__all__ = ['DEFAULT_DOCSTRING', 'ScriptAssembler', 'verb_helper_fn']

DEFAULT_DOCSTRING = 'API client generated by apitree. Do not edit.'

REQUEST_SOURCE = '''
from urllib.parse import quote

import httpx


def _request(method, options, body, path):
    request_options = dict(options)
    base_url = request_options.pop('base_url', '')
    if 'qs' in request_options:
        request_options['params'] = request_options.pop('qs')
    if body is not None:
        request_options['json'] = body
    response = httpx.request(method, base_url + path, **request_options)
    try:
        content = response.json()
    except ValueError:
        content = response.text
    return {'status_code': response.status_code, 'body': content}
'''

BASE_CLASSES_SOURCE = '''
class _Resource:

    def __init__(self, options=None, path=''):
        self._options = {} if options is None else options
        self._path = path

    def __repr__(self):
        return f'{type(self).__name__}({self._path!r})'


class _Item(_Resource):

    def __init__(self, options, path, param):
        super().__init__(options, path)
        self._param = quote(str(param), safe='')

    def __repr__(self):
        return f'{type(self).__name__}({self._path!r}, {self._param!r})'
'''


def verb_helper_fn(method: str) -> ast.FunctionDef:
    """Build the module-level helper for one HTTP verb.

    ``get`` sends no body; every other verb forwards the body it receives.
    """
    if method in BODYLESS_METHODS:
        args = [_argument('options'), _argument('path')]
        body_arg: ast.expr = ast.Constant(value=None)
    else:
        args = [_argument('options'), _argument('body'), _argument('path')]
        body_arg = _name('body')

    return _func(
        name=f'_{method}',
        args=args,
        body=[
            ast.Return(
                value=_call(
                    _name('_request'),
                    args=[
                        ast.Constant(value=method.upper()),
                        _name('options'),
                        body_arg,
                        _name('path'),
                    ],
                )
            )
        ],
    )


class ScriptAssembler:
    """Joins emitted units into one self-contained client module.

    Example:
        >>> assembler = ScriptAssembler()
        >>> source = assembler.assemble([unit.source for unit in units])
    """

    def __init__(self, docstring: str | None = DEFAULT_DOCSTRING):
        """Initialize the assembler.

        Args:
            docstring: Module docstring placed at the top of the output.
        """
        self.docstring = docstring

    def preamble(self) -> str:
        parts = []
        if self.docstring:
            parts.append(unparse([_docstring(self.docstring)]))
        parts.append(REQUEST_SOURCE.strip())
        parts.append(unparse([verb_helper_fn(method) for method in _helper_methods()]))
        parts.append(BASE_CLASSES_SOURCE.strip())
        return '\n\n\n'.join(parts)

    def epilogue(self) -> str:
        return unparse([_all([ROOT_CLASS_NAME])])

    def assemble(self, units: list[str]) -> str:
        """Wrap the unit sources with the preamble and epilogue.

        Args:
            units: Source text of every emitted unit, in output order.

        Returns:
            The complete module source, ending with a newline.
        """
        sections = [self.preamble(), *units, self.epilogue()]
        return '\n\n\n'.join(section.strip() for section in sections) + '\n'


def _helper_methods() -> list[str]:
    # Conventional verb order first, remaining verbs after
    order = ['get', 'post', 'put', 'delete', 'options', 'head']
    return order + [method for method in HTTP_METHODS if method not in order]
