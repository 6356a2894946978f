"""Loading generated client source into a live object.

The TextToCallable interface isolates the only place where generated code
is executed; the rest of apitree only produces text.
"""

import logging
import types
from abc import ABC, abstractmethod
from typing import Any

from apitree.exceptions import ClientLoadError

logger = logging.getLogger(__name__)

__all__ = ['ModuleLoader', 'TextToCallable']


class TextToCallable(ABC):
    """Turns generated source text into an invocable object."""

    @abstractmethod
    def load(self, source: str) -> Any:
        """Load ``source`` and return its exported entry point.

        Raises:
            ClientLoadError: If the source cannot be loaded.
        """
        pass


class ModuleLoader(TextToCallable):
    """Executes generated source in a fresh module and returns its export.

    The first name listed in the module's ``__all__`` is returned, which for
    apitree output is the ``Client`` class.

    Example:
        >>> Client = ModuleLoader().load(source)
        >>> client = Client({'base_url': 'https://kubernetes.local'})
        >>> client.api.v1.namespaces.get()
    """

    def __init__(self, module_name: str = 'apitree_client'):
        self.module_name = module_name

    def load_module(self, source: str) -> types.ModuleType:
        """Execute ``source`` as a new module object.

        The module is not registered in ``sys.modules``.
        """
        module = types.ModuleType(self.module_name)
        try:
            code = compile(source, f'<{self.module_name}>', 'exec')
            exec(code, module.__dict__)
        except Exception as e:
            raise ClientLoadError(self.module_name, cause=e) from e
        return module

    def load(self, source: str) -> Any:
        module = self.load_module(source)

        exports = getattr(module, '__all__', None)
        if not exports:
            raise ClientLoadError(
                self.module_name, cause=LookupError('module defines no __all__')
            )

        name = exports[0]
        if not hasattr(module, name):
            raise ClientLoadError(
                self.module_name, cause=LookupError(f'exported name {name!r} is missing')
            )

        logger.debug('Loaded %s.%s', self.module_name, name)
        return getattr(module, name)
