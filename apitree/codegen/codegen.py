"""Code generation module for apitree.

This module provides the main Codegen class that orchestrates the
generation of a navigable API client from a Swagger/OpenAPI description,
and the ``create_api_script``/``create_api`` entry points built on it.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from apitree.aliases import DEFAULT_RESOURCE_ALIASES, merge_aliases
from apitree.codegen.assembler import ScriptAssembler
from apitree.codegen.emitter import ResourceEmitter
from apitree.codegen.file_writer import PythonFileWriter, validate_python_syntax
from apitree.codegen.loader import ModuleLoader, TextToCallable
from apitree.codegen.renderers import (
    AstNodeRenderer,
    NodeRenderer,
    TemplateNodeRenderer,
)
from apitree.codegen.schema import SchemaLoader
from apitree.codegen.tree import ResourceTree, ResourceTreeBuilder
from apitree.config import DocumentConfig
from apitree.exceptions import CodeGenerationError

logger = logging.getLogger(__name__)

__all__ = ['Codegen', 'create_api', 'create_api_script']

Source = str | Path | Mapping


class Codegen:
    """Main generator for navigable API clients.

    The generation pipeline is:
    - Resolve the API description into its ``paths`` mapping
    - Build the resource tree from the path templates
    - Render one code unit per resource node
    - Assemble the units with the request helpers into one module

    Attributes:
        config: The DocumentConfig containing source and output settings.

    Example:
        >>> from apitree.config import DocumentConfig
        >>> from apitree.codegen.codegen import Codegen
        >>>
        >>> config = DocumentConfig(
        ...     source="./swagger.json",
        ...     output="./client/kubernetes.py"
        ... )
        >>> codegen = Codegen(config)
        >>> codegen.generate()
        # Creates ./client/kubernetes.py
    """

    def __init__(
        self,
        config: DocumentConfig,
        schema_loader: SchemaLoader | None = None,
        renderer: NodeRenderer | None = None,
        loader: TextToCallable | None = None,
    ):
        """Initialize the code generator.

        Args:
            config: Configuration specifying source document and output.
            schema_loader: Optional custom schema loader.
            renderer: Optional node renderer; by default chosen from
                ``config.renderer``.
            loader: Optional adapter used by ``create_api``.
        """
        self.config = config
        self._schema_loader = schema_loader or SchemaLoader(
            resolve_external_refs=config.resolve_external_refs
        )
        self._renderer = renderer or self._default_renderer()
        self._loader = loader or ModuleLoader()

    def _default_renderer(self) -> NodeRenderer:
        if self.config.renderer == 'template':
            return TemplateNodeRenderer(self.config.template_dir)
        return AstNodeRenderer()

    def _aliases(self) -> Mapping[str, tuple[str, ...]]:
        base = DEFAULT_RESOURCE_ALIASES if self.config.default_aliases else {}
        return merge_aliases(base, self.config.aliases)

    def build_tree(self, source: Source | None = None) -> ResourceTree:
        """Resolve the description and build its resource tree.

        Raises:
            SchemaLoadError: If the document cannot be loaded.
            SchemaValidationError: If the document is not an API description.
        """
        paths = self._schema_loader.load(self.config.source if source is None else source)
        return ResourceTreeBuilder(self._aliases()).build(paths)

    def create_api_script(self, source: Source | None = None) -> str:
        """Generate the client module source.

        Args:
            source: Document to use instead of ``config.source``.

        Returns:
            The complete module source.

        Raises:
            SchemaError: If the document cannot be resolved.
            CodeGenerationError: If the client cannot be generated.
        """
        tree = self.build_tree(source)
        emitter = ResourceEmitter(self._renderer, root=self.config.root)
        units = emitter.emit(tree)
        script = ScriptAssembler().assemble([unit.source for unit in units])

        if self.config.validate_syntax:
            try:
                validate_python_syntax(script)
            except SyntaxError as e:
                raise CodeGenerationError(
                    'Generated client is not valid Python', cause=e
                ) from e

        logger.info(
            'Generated client with %d resources from %s', len(tree), self.config.source
        )
        return script

    def create_api(self, source: Source | None = None) -> Any:
        """Generate the client and load it into a callable ``Client`` class.

        Raises:
            SchemaError: If the document cannot be resolved.
            CodeGenerationError: If the client cannot be generated.
            ClientLoadError: If the generated source cannot be loaded.
        """
        return self._loader.load(self.create_api_script(source))

    def generate(self) -> str:
        """Generate the client and write it to ``config.output``.

        Returns:
            The path of the written file.
        """
        script = self.create_api_script()
        path = PythonFileWriter(validate_syntax=False).write(script, self.config.output)
        logger.info('Wrote %s', path)
        return path


def _config_for(spec: Source, options: dict) -> DocumentConfig:
    source = spec if isinstance(spec, (str, Path)) else '<document>'
    return DocumentConfig(source=str(source), output=options.pop('output', ''), **options)


def create_api_script(spec: Source, **options) -> str:
    """Generate client source for a description in one call.

    Args:
        spec: Parsed document, file path or URL.
        **options: Any DocumentConfig field, e.g. ``root='api'``.

    Returns:
        The complete module source.
    """
    return Codegen(_config_for(spec, options)).create_api_script(spec)


def create_api(spec: Source, **options) -> Any:
    """Generate a client for a description and load it.

    Args:
        spec: Parsed document, file path or URL.
        **options: Any DocumentConfig field, e.g. ``root='api'``.

    Returns:
        The generated ``Client`` class.

    Example:
        >>> Client = create_api(swagger, root='api')
        >>> Client({'base_url': 'https://kubernetes.local'}).api.v1.ns('default').po.get()
    """
    return Codegen(_config_for(spec, options)).create_api(spec)
