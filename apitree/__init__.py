"""apitree - Generate navigable Python API clients from Swagger/OpenAPI paths.

apitree folds the path templates of an API description into a tree of
resources and emits a client module with one accessor per path segment and
one method per HTTP verb.

Quick Start:
    >>> from apitree import create_api
    >>>
    >>> Client = create_api('./swagger.json', root='api')
    >>> client = Client({'base_url': 'https://kubernetes.local'})
    >>> client.api.v1.namespaces('default').pods.get()
    {'status_code': 200, 'body': {...}}

CLI Usage:
    $ apitree generate --config apitree.yaml
    $ apitree inspect ./swagger.json
"""

from importlib.metadata import PackageNotFoundError, version

from apitree.aliases import DEFAULT_RESOURCE_ALIASES, merge_aliases
from apitree.codegen.codegen import Codegen, create_api, create_api_script
from apitree.codegen.tree import ResourceNode, ResourceTree, ResourceTreeBuilder
from apitree.config import CodegenConfig, DocumentConfig, get_config
from apitree.exceptions import (
    ApiTreeError,
    ClientLoadError,
    CodeGenerationError,
    ConfigurationError,
    OutputError,
    SchemaError,
    SchemaLoadError,
    SchemaValidationError,
)

__all__ = [
    # Entry points
    'Codegen',
    'create_api',
    'create_api_script',
    # Resource tree
    'ResourceNode',
    'ResourceTree',
    'ResourceTreeBuilder',
    'DEFAULT_RESOURCE_ALIASES',
    'merge_aliases',
    # Configuration
    'CodegenConfig',
    'DocumentConfig',
    'get_config',
    # Exceptions
    'ApiTreeError',
    'SchemaError',
    'SchemaLoadError',
    'SchemaValidationError',
    'CodeGenerationError',
    'ClientLoadError',
    'ConfigurationError',
    'OutputError',
]

try:
    __version__ = version('apitree')
except PackageNotFoundError:
    __version__ = 'unknown'
