import json
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings

from apitree.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['apitree.yaml', 'apitree.yml']


class DocumentConfig(BaseModel):
    """Represents a single document to be processed."""

    source: str = Field(..., description='Path or URL to the Swagger/OpenAPI document.')

    output: str = Field(..., description='Python file the generated client is written to.')

    root: str | None = Field(
        None,
        description='Optional name of the single top-level resource the client exposes, e.g. "api".',
    )

    aliases: dict[str, list[str]] = Field(
        default_factory=dict,
        description='Extra resource aliases; entries replace the defaults for the same name.',
    )

    default_aliases: bool = Field(
        True, description='Whether the built-in Kubernetes aliases are used.'
    )

    renderer: Literal['ast', 'template'] = Field(
        'ast', description='How accessor classes are rendered.'
    )

    template_dir: str | None = Field(
        None,
        description='Directory with a custom resource.py.jinja, used by the template renderer.',
    )

    validate_syntax: bool = Field(
        True, description='Whether generated code is compiled before it is returned.'
    )

    resolve_external_refs: bool = Field(
        False, description='Whether $ref references to other files or URLs are followed.'
    )


class CodegenConfig(BaseSettings):
    documents: list[DocumentConfig] = Field(
        ..., description='List of API documents to process.'
    )


def load_yaml(path: str | Path) -> dict:
    import yaml

    return yaml.safe_load(Path(path).read_text())


def load_json(path: str | Path) -> dict:
    return json.loads(Path(path).read_text())


def _validate(data: dict, path: str | Path) -> CodegenConfig:
    try:
        return CodegenConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f'Invalid configuration: {e}', config_path=str(path)
        ) from e


def get_config(path: str | None = None) -> CodegenConfig:
    """Load configuration from a file or from the current directory.

    Looks for an explicit file first, then ``apitree.yaml``/``apitree.yml``,
    then a ``[tool.apitree]`` table in ``pyproject.toml``.
    """
    if path:
        if not Path(path).exists():
            raise ConfigurationError('Configuration file not found', config_path=path)
        if Path(path).suffix.lower() == '.json':
            return _validate(load_json(path), path)
        return _validate(load_yaml(path), path)

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        candidate = Path(cwd) / filename
        if candidate.exists():
            return _validate(load_yaml(candidate), candidate)

    candidate = Path(cwd) / 'pyproject.toml'

    if candidate.exists():
        import tomllib

        pyproject = tomllib.loads(candidate.read_text())
        tools = pyproject.get('tool', {})

        if 'apitree' in tools:
            return _validate(tools['apitree'], candidate)

    raise ConfigurationError('Configuration not found', config_path=cwd)
