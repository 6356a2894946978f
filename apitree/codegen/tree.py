"""Resource tree structure built from API path templates.

This module provides the ResourceNode and ResourceTree dataclasses and the
ResourceTreeBuilder class that folds a mapping of path templates to
operation descriptors into a tree of named resources.

Nodes are keyed by segment name across the whole tree: a literal segment
that appears under several parents (``/api/v1/pods`` and
``/api/v1/namespaces/{namespace}/pods``) is a single node listed as a child
of each parent.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field

from apitree.aliases import DEFAULT_RESOURCE_ALIASES
from apitree.codegen.utils import is_http_method

logger = logging.getLogger(__name__)

__all__ = [
    'ResourceNode',
    'ResourceTree',
    'ResourceTreeBuilder',
    'build_resource_tree',
    'walk_nodes',
]


@dataclass(eq=False)
class ResourceNode:
    """One named, literal path segment and everything nested beneath it.

    Attributes:
        name: The path segment that produced the node, e.g. ``pods``.
        aliases: Short names for the node taken from the alias table.
        children: Nodes reached by appending a literal segment, in first-seen order.
        methods: HTTP verbs callable on the node's own (collection) path.
        parameter_methods: HTTP verbs callable on the node's path suffixed
            with a captured parameter (the item path).
        parameter_name: Name of the ``{...}`` segment following this node, if any.
    """

    name: str
    aliases: list[str] = field(default_factory=list)
    children: list[ResourceNode] = field(default_factory=list)
    methods: list[str] = field(default_factory=list)
    parameter_methods: list[str] = field(default_factory=list)
    parameter_name: str | None = None

    @property
    def has_parameter(self) -> bool:
        return self.parameter_name is not None

    def add_child(self, node: ResourceNode) -> None:
        if not any(child is node for child in self.children):
            self.children.append(node)

    def add_method(self, method: str) -> None:
        if method not in self.methods:
            self.methods.append(method)

    def add_parameter_method(self, method: str) -> None:
        if method not in self.parameter_methods:
            self.parameter_methods.append(method)

    def walk(self) -> Iterator[ResourceNode]:
        """Iterate over this node and its descendants in pre-order.

        Shared nodes and nodes reachable through a cycle are yielded once.
        """
        yield from walk_nodes([self])

    def __repr__(self) -> str:
        return (
            f'ResourceNode(name={self.name!r}, '
            f'children={[child.name for child in self.children]!r}, '
            f'methods={self.methods!r}, '
            f'parameter_methods={self.parameter_methods!r}, '
            f'parameter_name={self.parameter_name!r})'
        )


def walk_nodes(roots: Iterable[ResourceNode]) -> Iterator[ResourceNode]:
    """Iterate pre-order from each root, yielding every node once."""
    seen: set[int] = set()
    stack = list(reversed(list(roots)))
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        yield node
        stack.extend(reversed(node.children))


@dataclass
class ResourceTree:
    """The resources of one API description.

    Attributes:
        roots: Nodes that start at least one path template, in first-seen order.
        nodes: Every node keyed by its segment name.
    """

    roots: dict[str, ResourceNode] = field(default_factory=dict)
    nodes: dict[str, ResourceNode] = field(default_factory=dict)

    def get(self, name: str) -> ResourceNode | None:
        return self.nodes.get(name)

    def walk(self) -> Iterator[ResourceNode]:
        """Iterate over all nodes reachable from the roots in pre-order.

        Every node is yielded exactly once, even when it is shared between
        parents or part of a cycle.
        """
        yield from walk_nodes(self.roots.values())

    def __contains__(self, name: object) -> bool:
        return name in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)


class ResourceTreeBuilder:
    """Builds a ResourceTree from a mapping of path templates.

    Example:
        >>> builder = ResourceTreeBuilder()
        >>> tree = builder.build({
        ...     '/namespaces': {'get': {}, 'post': {}},
        ...     '/namespaces/{name}': {'get': {}, 'delete': {}},
        ... })
        >>> tree.get('namespaces').parameter_methods
        ['get', 'delete']
    """

    def __init__(
        self, aliases: Mapping[str, Sequence[str]] = DEFAULT_RESOURCE_ALIASES
    ):
        """Initialize the tree builder.

        Args:
            aliases: Table mapping resource names to their short aliases.
        """
        self.aliases = aliases

    def build(self, paths: Mapping[str, Mapping]) -> ResourceTree:
        """Build a resource tree from path templates.

        Args:
            paths: Mapping of path template (``/api/v1/namespaces/{namespace}``)
                to its operation descriptors keyed by HTTP verb.

        Returns:
            The ResourceTree holding every node created from ``paths``.
        """
        tree = ResourceTree()

        for template, operations in paths.items():
            self._add_template(tree, template, operations)

        logger.debug(
            'Built resource tree with %d nodes and %d roots',
            len(tree.nodes),
            len(tree.roots),
        )
        return tree

    def _add_template(
        self, tree: ResourceTree, template: str, operations: Mapping | None
    ) -> None:
        segments = [segment for segment in template.split('/') if segment]
        if not segments:
            logger.debug('Skipping empty path template %r', template)
            return

        prev: ResourceNode | None = None
        for segment in segments:
            if segment.startswith('{'):
                if prev is not None:
                    prev.parameter_name = _parameter_name(segment)
                continue

            node = tree.nodes.get(segment)
            if node is None:
                node = self._create_node(segment)
                tree.nodes[segment] = node
            if prev is None:
                tree.roots.setdefault(segment, node)
            else:
                prev.add_child(node)
            prev = node

        if prev is None:
            logger.debug('Path template %r has no literal segment', template)
            return

        verbs = [key.lower() for key in _keys(operations) if is_http_method(key)]
        if segments[-1].startswith('{'):
            for verb in verbs:
                prev.add_parameter_method(verb)
        else:
            for verb in verbs:
                prev.add_method(verb)

        logger.debug('Added %r to %r with verbs %s', template, prev.name, verbs)

    def _create_node(self, name: str) -> ResourceNode:
        return ResourceNode(name=name, aliases=list(self.aliases.get(name, ())))


def _parameter_name(segment: str) -> str:
    if segment.endswith('}'):
        return segment[1:-1]
    return segment[1:]


def _keys(operations: Mapping | None) -> list:
    if isinstance(operations, Mapping):
        return list(operations.keys())
    return []


def build_resource_tree(
    paths: Mapping[str, Mapping],
    aliases: Mapping[str, Sequence[str]] | None = None,
) -> ResourceTree:
    """Convenience function to build a resource tree.

    Args:
        paths: Mapping of path template to operation descriptors.
        aliases: Optional alias table; defaults to the Kubernetes aliases.

    Returns:
        The built ResourceTree.
    """
    if aliases is None:
        aliases = DEFAULT_RESOURCE_ALIASES
    return ResourceTreeBuilder(aliases).build(paths)
