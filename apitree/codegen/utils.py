import keyword
import re
import unicodedata
from urllib.parse import urlparse

__all__ = (
    'HTTP_METHODS',
    'is_http_method',
    'is_url',
    'sanitize_attribute_name',
    'sanitize_class_name',
)

HTTP_METHODS = ('connect', 'delete', 'get', 'head', 'options', 'post', 'put')


def is_http_method(value) -> bool:
    return isinstance(value, str) and value.lower() in HTTP_METHODS


def capitalize(input_string):
    if not input_string:
        return ''
    return input_string[0].upper() + input_string[1:]


def is_url(text):
    try:
        result = urlparse(text)
        return result.scheme in ('http', 'https') and bool(result.netloc)
    except ValueError:
        return False


def remove_accents(input_str):
    nfkd_form = unicodedata.normalize('NFKD', input_str)
    return ''.join(c for c in nfkd_form if not unicodedata.combining(c))


def sanitize_attribute_name(name: str, reserved: tuple[str, ...] = ()) -> str:
    """Convert a path segment into a valid Python attribute name.

    - Replace every run of invalid characters with an underscore
    - Ensure it doesn't start with a digit
    - Append an underscore to keywords and ``reserved`` names
    """
    sanitized = re.sub(r'[^A-Za-z0-9_]+', '_', remove_accents(name or '')).strip('_')

    if not sanitized:
        sanitized = 'resource'
    if sanitized[0].isdigit():
        sanitized = '_' + sanitized
    if keyword.iskeyword(sanitized) or sanitized in reserved:
        sanitized = f'{sanitized}_'
    return sanitized


def sanitize_class_name(name: str) -> str:
    """Convert a path segment into a PascalCase class name.

    ``rbac.authorization.k8s.io`` becomes ``RbacAuthorizationK8sIo`` and
    ``v1beta1`` becomes ``V1beta1``.
    """
    parts = re.sub(r'[^A-Za-z0-9]+', '_', remove_accents(name or '')).split('_')
    sanitized = ''.join(capitalize(part) for part in parts if part)

    if sanitized and sanitized[0].isdigit():
        sanitized = '_' + sanitized

    return sanitized or 'Unnamed'
