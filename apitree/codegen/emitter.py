"""Resource emitter for generating accessor classes from a resource tree.

This module provides the ResourceEmitter class that walks a ResourceTree
in pre-order, resolves the Python identifiers of every node and renders
one code unit per node with a NodeRenderer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from apitree.codegen.renderers import AstNodeRenderer, NodeRenderer
from apitree.codegen.tree import ResourceNode, ResourceTree, walk_nodes
from apitree.codegen.types import ROOT_CLASS_NAME, ChildAccessor, NodeContext
from apitree.codegen.utils import (
    HTTP_METHODS,
    sanitize_attribute_name,
    sanitize_class_name,
)
from apitree.exceptions import CodeGenerationError

logger = logging.getLogger(__name__)

# Names a child accessor may not take inside a generated class body
ACCESSOR_RESERVED = (*HTTP_METHODS, 'property')

__all__ = ['EmittedUnit', 'ResourceEmitter']


@dataclass
class EmittedUnit:
    """Information about an emitted code unit.

    Attributes:
        name: Path segment of the node, empty for the client root.
        class_names: Classes defined by the unit.
        source: The rendered source text.
    """

    name: str
    class_names: list[str] = field(default_factory=list)
    source: str = ''


class ResourceEmitter:
    """Emits accessor classes for every node of a ResourceTree.

    The first unit is always the ``Client`` root accessor, whose children
    are the tree roots. Nodes follow in pre-order, children in first-seen
    order; a node reachable from several parents is emitted once.

    Example:
        >>> emitter = ResourceEmitter()
        >>> source = emitter.emit_source(tree)
    """

    def __init__(self, renderer: NodeRenderer | None = None, root: str | None = None):
        """Initialize the resource emitter.

        Args:
            renderer: Renderer used for each node. Defaults to AstNodeRenderer.
            root: Optional name of the single root family the client exposes.
                When omitted every root of the tree is exposed.
        """
        self.renderer = renderer or AstNodeRenderer()
        self.root = root

    def emit(self, tree: ResourceTree) -> list[EmittedUnit]:
        """Render every reachable node of the tree.

        Args:
            tree: The tree to emit.

        Returns:
            The emitted units in output order.

        Raises:
            CodeGenerationError: If the configured root is not in the tree
                or the renderer fails.
        """
        roots = self._select_roots(tree)
        nodes = list(walk_nodes(roots))
        class_names = _assign_class_names(nodes)

        root_context = NodeContext(
            name='',
            class_name=ROOT_CLASS_NAME,
            children=_child_accessors(roots, class_names),
        )
        units = [self._render(root_context)]

        for node in nodes:
            units.append(self._render(_node_context(node, class_names)))

        logger.debug('Emitted %d units', len(units))
        return units

    def emit_source(self, tree: ResourceTree) -> str:
        """Render the tree and concatenate the units into one text buffer."""
        return '\n\n\n'.join(unit.source for unit in self.emit(tree))

    def _select_roots(self, tree: ResourceTree) -> list[ResourceNode]:
        if self.root is None:
            return list(tree.roots.values())

        node = tree.get(self.root)
        if node is None:
            raise CodeGenerationError(
                f"Root resource '{self.root}' not found",
                context='client root',
            )
        return [node]

    def _render(self, context: NodeContext) -> EmittedUnit:
        logger.debug('Rendering %s', context.class_name)
        try:
            source = self.renderer.render(context)
        except Exception as e:
            raise CodeGenerationError(
                'Failed to render resource', context=context.class_name, cause=e
            ) from e

        class_names = [context.class_name]
        if context.item_class_name:
            class_names.append(context.item_class_name)
        return EmittedUnit(name=context.name, class_names=class_names, source=source)


def _assign_class_names(nodes: list[ResourceNode]) -> dict[int, tuple[str, str]]:
    """Give every node unique collection and item class names."""
    used = {ROOT_CLASS_NAME}
    names: dict[int, tuple[str, str]] = {}

    for node in nodes:
        base = sanitize_class_name(node.name)
        candidate = base
        suffix = 2
        while f'{candidate}Resource' in used or f'{candidate}Item' in used:
            candidate = f'{base}{suffix}'
            suffix += 1

        names[id(node)] = (f'{candidate}Resource', f'{candidate}Item')
        used.update(names[id(node)])

    return names


def _child_accessors(
    children: list[ResourceNode], class_names: dict[int, tuple[str, str]]
) -> tuple[ChildAccessor, ...]:
    taken: set[str] = set()
    attributes = []

    for child in children:
        attribute = sanitize_attribute_name(child.name, reserved=ACCESSOR_RESERVED)
        base = attribute
        suffix = 2
        while attribute in taken:
            attribute = f'{base}_{suffix}'
            suffix += 1
        taken.add(attribute)
        attributes.append(attribute)

    accessors = []
    for child, attribute in zip(children, attributes):
        aliases = []
        for alias in child.aliases:
            alias_attribute = sanitize_attribute_name(alias, reserved=ACCESSOR_RESERVED)
            if alias_attribute in taken:
                logger.debug(
                    'Dropping alias %r of %r, name already in use', alias, child.name
                )
                continue
            taken.add(alias_attribute)
            aliases.append(alias_attribute)

        accessors.append(
            ChildAccessor(
                name=child.name,
                attribute=attribute,
                aliases=tuple(aliases),
                class_name=class_names[id(child)][0],
                path=f'/{child.name}',
            )
        )

    return tuple(accessors)


def _node_context(
    node: ResourceNode, class_names: dict[int, tuple[str, str]]
) -> NodeContext:
    class_name, item_class_name = class_names[id(node)]
    parameter_arg = None
    if node.has_parameter:
        parameter_arg = sanitize_attribute_name(
            node.parameter_name or 'param', reserved=('self',)
        )

    return NodeContext(
        name=node.name,
        class_name=class_name,
        item_class_name=item_class_name if node.has_parameter else None,
        aliases=tuple(node.aliases),
        children=_child_accessors(node.children, class_names),
        methods=tuple(node.methods),
        parameter_methods=tuple(node.parameter_methods),
        parameter_name=node.parameter_name,
        parameter_arg=parameter_arg,
    )
