"""Custom exceptions for apitree.

This module defines the hierarchy of exceptions raised while resolving an
API description, generating client source text and loading that text into
a live client.
"""


class ApiTreeError(Exception):
    """Base exception for all apitree errors.

    All exceptions raised by apitree inherit from this class, making it easy
    to catch every apitree-related error with a single except clause.

    Example:
        try:
            create_api_script(spec)
        except ApiTreeError as e:
            print(f"apitree error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class SchemaError(ApiTreeError):
    """Base exception for failures resolving the API description."""

    pass


class SchemaLoadError(SchemaError):
    """Failed to load an API description from a source.

    Raised when the document cannot be read from the given URL or file path,
    or when its content is neither JSON nor YAML.

    Attributes:
        source: The source path or URL that failed to load.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load API description from '{source}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class SchemaValidationError(SchemaError):
    """The loaded document is not a usable Swagger/OpenAPI description.

    Attributes:
        source: The source path or URL of the invalid document.
        errors: List of validation error messages.
    """

    def __init__(self, source: str, errors: list[str] | None = None):
        self.source = source
        self.errors = errors or []
        message = f"API description validation failed for '{source}'"
        if errors:
            message += f': {"; ".join(errors)}'
        super().__init__(message)


class CodeGenerationError(ApiTreeError):
    """Error while turning a resource tree into client source text.

    Attributes:
        context: Additional context about what was being generated.
        cause: The underlying exception that caused the failure.
    """

    def __init__(
        self, message: str, context: str | None = None, cause: Exception | None = None
    ):
        self.context = context
        self.cause = cause
        full_message = message
        if context:
            full_message = f'{message} (while generating {context})'
        if cause:
            full_message += f': {cause}'
        super().__init__(full_message)


class ClientLoadError(ApiTreeError):
    """Generated source text could not be turned into a callable client.

    Only raised on the loading path (``create_api``), never while generating
    the text itself.

    Attributes:
        module_name: Name of the module the text was loaded as.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, module_name: str, cause: Exception | None = None):
        self.module_name = module_name
        self.cause = cause
        message = f"Failed to load generated client module '{module_name}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class ConfigurationError(ApiTreeError):
    """Error in configuration.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)


class OutputError(ApiTreeError):
    """Error writing generated output.

    Attributes:
        output_path: The path where output was being written.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, output_path: str, cause: Exception | None = None):
        self.output_path = output_path
        self.cause = cause
        message = f"Failed to write output to '{output_path}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)
