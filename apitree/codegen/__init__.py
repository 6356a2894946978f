"""Code generation module for apitree.

This module provides the two-stage transformation from an API description
to a navigable client, plus the collaborators around it.

Main Components:
    - ResourceTreeBuilder: Folds path templates into a tree of resources
    - ResourceEmitter: Renders one code unit per resource node
    - AstNodeRenderer / TemplateNodeRenderer: Node renderer implementations
    - ScriptAssembler: Wraps units with request helpers and the export
    - ModuleLoader: Loads generated source into a live client
    - SchemaLoader: Loads API descriptions from mappings, URLs or files
    - Codegen: The orchestrator tying the pipeline together

Example:
    >>> from apitree.codegen import Codegen
    >>> from apitree.config import DocumentConfig
    >>>
    >>> config = DocumentConfig(
    ...     source="./swagger.json",
    ...     output="./client/kubernetes.py"
    ... )
    >>> Codegen(config).generate()
"""

from apitree.codegen.assembler import ScriptAssembler
from apitree.codegen.codegen import Codegen, create_api, create_api_script
from apitree.codegen.emitter import EmittedUnit, ResourceEmitter
from apitree.codegen.loader import ModuleLoader, TextToCallable
from apitree.codegen.renderers import (
    AstNodeRenderer,
    NodeRenderer,
    TemplateNodeRenderer,
    method_source,
)
from apitree.codegen.schema import ApiDocument, SchemaLoader
from apitree.codegen.tree import (
    ResourceNode,
    ResourceTree,
    ResourceTreeBuilder,
    build_resource_tree,
)
from apitree.codegen.types import ChildAccessor, NodeContext

__all__ = [
    'ApiDocument',
    'AstNodeRenderer',
    'ChildAccessor',
    'Codegen',
    'EmittedUnit',
    'ModuleLoader',
    'NodeContext',
    'NodeRenderer',
    'ResourceEmitter',
    'ResourceNode',
    'ResourceTree',
    'ResourceTreeBuilder',
    'SchemaLoader',
    'ScriptAssembler',
    'TemplateNodeRenderer',
    'TextToCallable',
    'build_resource_tree',
    'create_api',
    'create_api_script',
    'method_source',
]
