"""Loading of API descriptions.

This module provides the SchemaLoader that resolves a raw Swagger 2.0 or
OpenAPI 3.x description (an already parsed mapping, a local JSON/YAML file
or an http(s) URL) into the validated ``paths`` mapping the resource tree
is built from.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urljoin

import httpx
import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from apitree.codegen.utils import is_url
from apitree.exceptions import SchemaLoadError, SchemaValidationError

logger = logging.getLogger(__name__)

__all__ = ['ApiDocument', 'SchemaLoader']


class ApiDocument(BaseModel):
    """The parts of a Swagger/OpenAPI document apitree relies on."""

    model_config = ConfigDict(extra='allow')

    swagger: str | None = None
    openapi: str | None = None
    paths: dict[str, dict[str, Any]] = {}

    @model_validator(mode='after')
    def _check_version(self) -> 'ApiDocument':
        if self.swagger is None and self.openapi is None:
            raise ValueError("document declares neither 'swagger' nor 'openapi'")
        return self

    @property
    def version(self) -> str:
        return self.swagger or self.openapi


class SchemaLoader:
    """Loads API descriptions from mappings, URLs or file paths.

    Features:
        - Load from URLs (http/https) or local file paths
        - Support for both JSON and YAML formats
        - Accept documents that are already parsed
        - Resolution of path item ``$ref`` references, optionally following
          external files and URLs

    Example:
        >>> loader = SchemaLoader()
        >>> paths = loader.load('https://kubernetes.local/swagger.json')
        >>> # or
        >>> paths = loader.load('/path/to/openapi.yaml')
        >>> # or
        >>> paths = loader.load({'swagger': '2.0', 'paths': {'/pods': {'get': {}}}})
    """

    def __init__(
        self,
        http_client: httpx.Client | None = None,
        resolve_external_refs: bool = False,
        base_path: str | Path | None = None,
    ):
        """Initialize the schema loader.

        Args:
            http_client: Optional HTTP client to use for URL requests.
            resolve_external_refs: Whether ``$ref`` references to other files
                or URLs are loaded and inlined.
            base_path: Base path for resolving relative file references.
                Defaults to the current working directory.
        """
        self._http_client = http_client
        self._resolve_external_refs = resolve_external_refs
        self._base_path = Path(base_path) if base_path else Path.cwd()
        self._external_cache: dict[str, dict] = {}

    def load(self, source: str | Path | Mapping) -> dict[str, dict[str, Any]]:
        """Load a document and return its resolved ``paths`` mapping.

        Args:
            source: URL, file path or parsed document.

        Returns:
            Mapping of path template to path item.

        Raises:
            SchemaLoadError: If the document cannot be loaded from the source.
            SchemaValidationError: If the document is not a Swagger/OpenAPI
                description.
        """
        return self.load_document(source).paths

    def load_document(self, source: str | Path | Mapping) -> ApiDocument:
        """Load, resolve and validate a document."""
        name = '<document>' if isinstance(source, Mapping) else str(source)

        try:
            if isinstance(source, Mapping):
                content = dict(source)
                location = str(self._base_path / '<document>')
            elif is_url(str(source)):
                content = self._load_from_url(str(source))
                location = str(source)
            else:
                path = Path(source)
                if not path.is_absolute():
                    path = self._base_path / path
                content = self._load_from_file(path)
                location = str(path)
        except SchemaLoadError:
            raise
        except Exception as e:
            raise SchemaLoadError(name, cause=e) from e

        if not isinstance(content, Mapping):
            raise SchemaValidationError(name, errors=['document is not a mapping'])

        try:
            document = ApiDocument.model_validate(content)
        except ValidationError as e:
            raise SchemaValidationError(
                name, errors=[error['msg'] for error in e.errors()]
            ) from e

        document.paths = {
            template: self._resolve_path_item(item, content, location, set())
            for template, item in document.paths.items()
        }
        logger.info(
            'Loaded %s (version %s) with %d paths',
            name,
            document.version,
            len(document.paths),
        )
        return document

    def _load_from_url(self, url: str) -> Any:
        """Load document content from a URL."""
        try:
            if self._http_client:
                response = self._http_client.get(url)
            else:
                response = httpx.get(url, follow_redirects=True, timeout=30.0)

            response.raise_for_status()
            content_type = response.headers.get('content-type', '')
            text = response.text

            if 'yaml' in content_type or url.endswith(('.yaml', '.yml')):
                return yaml.safe_load(text)
            return json.loads(text)

        except httpx.HTTPError as e:
            raise SchemaLoadError(url, cause=e) from e
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(url, cause=e) from e

    def _load_from_file(self, path: Path) -> Any:
        """Load document content from a file."""
        if not path.exists():
            raise SchemaLoadError(
                str(path), cause=FileNotFoundError(f'File not found: {path}')
            )

        try:
            text = path.read_text(encoding='utf-8')
            if path.suffix.lower() in ('.yaml', '.yml'):
                return yaml.safe_load(text)
            return json.loads(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(str(path), cause=e) from e
        except OSError as e:
            raise SchemaLoadError(str(path), cause=e) from e

    def _resolve_path_item(
        self, item: dict, document: Mapping, location: str, visited: set[str]
    ) -> dict:
        """Inline a path item ``$ref``, keeping sibling keys over referenced ones."""
        ref = item.get('$ref')
        if not isinstance(ref, str):
            return item

        if ref.startswith('#'):
            cache_key = f'{location}{ref}'
            target_document, target_location = document, location
            pointer = ref[1:]
        else:
            if not self._resolve_external_refs:
                logger.warning(f'Skipping external path reference: {ref}')
                return item
            target_location, pointer = self._locate(ref, location)
            cache_key = f'{target_location}#{pointer}'
            target_document = self._load_external(target_location)
            if target_document is None:
                return item

        if cache_key in visited:
            logger.warning(f'Circular reference detected: {cache_key}')
            return item

        try:
            target = _resolve_json_pointer(target_document, pointer)
        except ValueError:
            logger.warning(f'Failed to resolve path reference: {ref}')
            return item

        if not isinstance(target, Mapping):
            logger.warning(f'Path reference does not point to an object: {ref}')
            return item

        resolved = self._resolve_path_item(
            dict(target), target_document, target_location, visited | {cache_key}
        )
        siblings = {key: value for key, value in item.items() if key != '$ref'}
        return {**resolved, **siblings}

    def _locate(self, ref: str, location: str) -> tuple[str, str]:
        if '#' in ref:
            file_part, pointer = ref.split('#', 1)
        else:
            file_part, pointer = ref, ''

        if is_url(file_part):
            return file_part, pointer
        if is_url(location):
            return urljoin(location, file_part), pointer
        return str(Path(location).parent / file_part), pointer

    def _load_external(self, location: str) -> Mapping | None:
        if location not in self._external_cache:
            try:
                if is_url(location):
                    self._external_cache[location] = self._load_from_url(location)
                else:
                    self._external_cache[location] = self._load_from_file(Path(location))
            except SchemaLoadError:
                logger.warning(f'Failed to resolve external reference: {location}')
                return None
        return self._external_cache[location]


def _resolve_json_pointer(obj: Any, pointer: str) -> Any:
    """Resolve a JSON pointer within an object."""
    if not pointer or pointer == '/':
        return obj

    current = obj
    for part in pointer.strip('/').split('/'):
        part = part.replace('~1', '/').replace('~0', '~')
        if isinstance(current, Mapping):
            if part not in current:
                raise ValueError(f'JSON pointer path not found: {pointer}')
            current = current[part]
        elif isinstance(current, list):
            try:
                current = current[int(part)]
            except (ValueError, IndexError):
                raise ValueError(f'JSON pointer path not found: {pointer}')
        else:
            raise ValueError(f'JSON pointer path not found: {pointer}')

    return current
