"""Tests for the node renderers."""

import ast

import pytest
from jinja2 import UndefinedError

from apitree.codegen.emitter import ResourceEmitter
from apitree.codegen.renderers import (
    COLLECTION_PATH,
    ITEM_PATH,
    AstNodeRenderer,
    TemplateNodeRenderer,
    method_source,
)
from apitree.codegen.tree import build_resource_tree
from apitree.codegen.types import ChildAccessor, NodeContext
from apitree.exceptions import CodeGenerationError

from .fixtures import KUBERNETES_PATHS, NAMESPACES_PATHS, PODS_PATHS

NAMESPACES_CONTEXT = NodeContext(
    name='namespaces',
    class_name='NamespacesResource',
    item_class_name='NamespacesItem',
    aliases=('ns',),
    children=(
        ChildAccessor(
            name='pods',
            attribute='pods',
            aliases=('po',),
            class_name='PodsResource',
            path='/pods',
        ),
    ),
    methods=('get', 'post'),
    parameter_methods=('get', 'delete'),
    parameter_name='namespace',
    parameter_arg='namespace',
)

PODS_CONTEXT = NodeContext(
    name='pods',
    class_name='PodsResource',
    aliases=('po',),
    methods=('get',),
)

ROOT_CONTEXT = NodeContext(name='', class_name='Client')


def _class_names(source):
    return [
        node.name for node in ast.walk(ast.parse(source)) if isinstance(node, ast.ClassDef)
    ]


def _methods(source, class_name):
    for node in ast.parse(source).body:
        if isinstance(node, ast.ClassDef) and node.name == class_name:
            return [item.name for item in node.body if isinstance(item, ast.FunctionDef)]
    raise AssertionError(f'class {class_name} not found')


class TestMethodSource:
    """Tests for method_source."""

    def test_get_has_no_body(self):
        assert method_source('get', COLLECTION_PATH) == (
            'def get(self):\n    return _get(self._options, self._path)'
        )

    def test_other_verbs_take_body(self):
        assert method_source('post', COLLECTION_PATH) == (
            'def post(self, body=None):\n    return _post(self._options, body, self._path)'
        )

    def test_item_path(self):
        assert method_source('delete', ITEM_PATH) == (
            'def delete(self, body=None):\n'
            "    return _delete(self._options, body, self._path + '/' + self._param)"
        )


@pytest.fixture(params=['ast', 'template'])
def renderer(request):
    """Fixture providing each renderer implementation."""
    if request.param == 'ast':
        return AstNodeRenderer()
    return TemplateNodeRenderer()


class TestRenderers:
    """Behaviour shared by both renderers."""

    def test_collection_and_item_classes(self, renderer):
        source = renderer.render(NAMESPACES_CONTEXT)

        assert _class_names(source) == ['NamespacesResource', 'NamespacesItem']
        assert 'class NamespacesResource(_Resource):' in source
        assert 'class NamespacesItem(_Item):' in source

    def test_collection_methods(self, renderer):
        source = renderer.render(NAMESPACES_CONTEXT)

        assert _methods(source, 'NamespacesResource') == ['pods', 'get', 'post', '__call__']
        assert 'return _get(self._options, self._path)' in source
        assert 'return _post(self._options, body, self._path)' in source

    def test_item_methods(self, renderer):
        source = renderer.render(NAMESPACES_CONTEXT)

        assert _methods(source, 'NamespacesItem') == ['pods', 'get', 'delete']
        assert "return _get(self._options, self._path + '/' + self._param)" in source
        assert (
            "return _delete(self._options, body, self._path + '/' + self._param)" in source
        )

    def test_call_returns_item(self, renderer):
        source = renderer.render(NAMESPACES_CONTEXT)

        assert 'def __call__(self, namespace):' in source
        assert 'return NamespacesItem(self._options, self._path, namespace)' in source

    def test_child_accessors_on_both_classes(self, renderer):
        source = renderer.render(NAMESPACES_CONTEXT)

        assert "return PodsResource(self._options, self._path + '/pods')" in source
        assert (
            "return PodsResource(self._options, self._path + '/' + self._param + '/pods')"
            in source
        )
        assert source.count('@property') == 2
        assert source.count('po = pods') == 2

    def test_collection_only(self, renderer):
        source = renderer.render(PODS_CONTEXT)

        assert _class_names(source) == ['PodsResource']
        assert source.count('_get(self._options, self._path)') == 1
        assert 'self._param' not in source
        assert '__call__' not in source

    def test_docstrings(self, renderer):
        tree = ast.parse(renderer.render(NAMESPACES_CONTEXT))
        collection, item = tree.body

        assert ast.get_docstring(collection) == (
            'Accessor for the ``namespaces`` resource. Aliases: ns.'
        )
        assert ast.get_docstring(item) == (
            'Accessor for a single ``namespaces`` resource addressed by ``namespace``.'
        )

    def test_empty_root(self, renderer):
        source = renderer.render(ROOT_CONTEXT)
        (client,) = ast.parse(source).body

        assert client.name == 'Client'
        assert ast.get_docstring(client) == 'Root accessor of the generated API client.'
        assert len(client.body) == 1


class TestRendererParity:
    """Both renderers produce the same program."""

    @pytest.mark.parametrize(
        'context', [NAMESPACES_CONTEXT, PODS_CONTEXT, ROOT_CONTEXT]
    )
    def test_same_ast_per_node(self, context):
        ast_source = AstNodeRenderer().render(context)
        template_source = TemplateNodeRenderer().render(context)

        assert ast.dump(ast.parse(ast_source)) == ast.dump(ast.parse(template_source))

    @pytest.mark.parametrize(
        'paths',
        [
            KUBERNETES_PATHS,
            NAMESPACES_PATHS,
            PODS_PATHS,
            {'/a"b/{c}': {'get': {}, 'put': {}}},
        ],
    )
    def test_same_ast_per_tree(self, paths):
        tree = build_resource_tree(paths)
        ast_source = ResourceEmitter(AstNodeRenderer()).emit_source(tree)
        template_source = ResourceEmitter(TemplateNodeRenderer()).emit_source(tree)

        assert ast.dump(ast.parse(ast_source)) == ast.dump(ast.parse(template_source))


class TestTemplateNodeRenderer:
    """Tests specific to the Jinja2 renderer."""

    def test_custom_template_dir(self, tmp_path):
        (tmp_path / 'resource.py.jinja').write_text(
            'class {{ node.class_name }}(_Resource):\n    pass\n'
        )

        renderer = TemplateNodeRenderer(tmp_path)

        assert renderer.render(PODS_CONTEXT) == 'class PodsResource(_Resource):\n    pass'

    def test_custom_template_name(self, tmp_path):
        (tmp_path / 'compact.jinja').write_text(
            '{% for verb in node.methods %}{{ method(verb, collection_path) }}{% endfor %}'
        )

        renderer = TemplateNodeRenderer(str(tmp_path), template_name='compact.jinja')

        assert renderer.render(PODS_CONTEXT) == method_source('get', 'self._path')

    def test_undefined_variables_fail(self, tmp_path):
        (tmp_path / 'resource.py.jinja').write_text('{{ node.missing }}')

        renderer = TemplateNodeRenderer(tmp_path)

        with pytest.raises(UndefinedError):
            renderer.render(PODS_CONTEXT)

    def test_template_errors_surface_as_generation_errors(self, tmp_path):
        (tmp_path / 'resource.py.jinja').write_text('{{ node.missing }}')

        emitter = ResourceEmitter(TemplateNodeRenderer(tmp_path))

        with pytest.raises(CodeGenerationError):
            emitter.emit(build_resource_tree(PODS_PATHS))

    def test_docstring_quotes_are_escaped(self):
        context = NodeContext(name='say "hi"', class_name='SayHiResource')

        (cls,) = ast.parse(TemplateNodeRenderer().render(context)).body

        assert ast.get_docstring(cls) == 'Accessor for the ``say "hi"`` resource.'
