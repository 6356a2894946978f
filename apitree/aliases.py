"""Short aliases for resource collections.

The default table covers the Kubernetes resource collections together with
the abbreviations kubectl accepts for them, so a generated client can be
navigated with either ``client.api.v1.namespaces`` or ``client.api.v1.ns``.
"""

from collections.abc import Mapping, Sequence
from types import MappingProxyType

__all__ = ('DEFAULT_RESOURCE_ALIASES', 'merge_aliases')

DEFAULT_RESOURCE_ALIASES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        'clusterroles': (),
        'clusterrolebindings': (),
        'componentstatuses': ('cs',),
        'configmaps': ('cm',),
        'cronjobs': (),
        'daemonsets': ('ds',),
        'deployments': ('deploy',),
        'events': ('ev',),
        'endpoints': ('ep',),
        'horizontalpodautoscalers': ('hpa',),
        'ingresses': ('ing',),
        'jobs': (),
        'limitranges': ('limits',),
        'namespaces': ('ns',),
        'nodes': ('no',),
        'persistentvolumes': ('pv',),
        'persistentvolumeclaims': ('pvc',),
        # Kubernetes 1.4 name of statefulsets
        'petsets': (),
        'pods': ('po',),
        'replicationcontrollers': ('rc',),
        'replicasets': ('rs',),
        'resourcequotas': ('quota',),
        'roles': (),
        'rolebindings': (),
        # Kubernetes 1.4 name of cronjobs
        'scheduledjobs': (),
        'secrets': (),
        'serviceaccounts': (),
        'services': ('svc',),
        'statefulsets': (),
        'thirdpartyresources': (),
    }
)


def merge_aliases(
    base: Mapping[str, Sequence[str]],
    overrides: Mapping[str, Sequence[str]] | None = None,
) -> Mapping[str, tuple[str, ...]]:
    """Return a read-only alias table with ``overrides`` replacing ``base`` entries.

    Args:
        base: The starting alias table.
        overrides: Entries to add or replace. A name mapped to an empty
            sequence removes its aliases.

    Returns:
        A new immutable mapping; neither input is modified.
    """
    merged = {name: tuple(aliases) for name, aliases in base.items()}
    for name, aliases in (overrides or {}).items():
        merged[name] = tuple(aliases)
    return MappingProxyType(merged)
