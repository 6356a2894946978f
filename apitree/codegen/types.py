"""Render-ready views of resource nodes.

The emitter resolves every Python identifier a node needs (class names,
accessor attributes, parameter argument) before handing the node to a
renderer, so renderers only lay out text.
"""

from dataclasses import dataclass, field

__all__ = ['ChildAccessor', 'NodeContext', 'ROOT_CLASS_NAME']

ROOT_CLASS_NAME = 'Client'


@dataclass(frozen=True)
class ChildAccessor:
    """A child resource as seen from its parent's accessor class.

    Attributes:
        name: The child's path segment.
        attribute: Attribute name of the accessor property.
        aliases: Additional attribute names bound to the same property.
        class_name: Collection class the property returns.
        path: Path suffix appended to the parent path, e.g. ``/pods``.
    """

    name: str
    attribute: str
    aliases: tuple[str, ...]
    class_name: str
    path: str

    @property
    def path_literal(self) -> str:
        return repr(self.path)


@dataclass(frozen=True)
class NodeContext:
    """Everything a renderer needs to produce one node's code unit.

    Attributes:
        name: The node's path segment (empty for the client root).
        class_name: Name of the collection accessor class.
        item_class_name: Name of the item accessor class, when the node
            captures a parameter.
        aliases: Alias names of the node itself.
        children: Accessors for the node's children.
        methods: Verbs callable on the collection path.
        parameter_methods: Verbs callable on the item path.
        parameter_name: Name of the captured path parameter.
        parameter_arg: Python argument name for the captured parameter.
    """

    name: str
    class_name: str
    item_class_name: str | None = None
    aliases: tuple[str, ...] = ()
    children: tuple[ChildAccessor, ...] = field(default_factory=tuple)
    methods: tuple[str, ...] = ()
    parameter_methods: tuple[str, ...] = ()
    parameter_name: str | None = None
    parameter_arg: str | None = None

    @property
    def is_root(self) -> bool:
        return self.class_name == ROOT_CLASS_NAME and not self.name

    @property
    def description(self) -> str:
        if self.is_root:
            return 'Root accessor of the generated API client.'
        text = f'Accessor for the ``{self.name}`` resource.'
        if self.aliases:
            text += f' Aliases: {", ".join(self.aliases)}.'
        return text

    @property
    def item_description(self) -> str:
        return (
            f'Accessor for a single ``{self.name}`` resource '
            f'addressed by ``{self.parameter_name}``.'
        )
