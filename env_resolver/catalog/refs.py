"""
Entity reference helpers.

Catalog references have the form "kind:namespace/name". The namespace is
optional and defaults to "default"; the kind is required for lookups.
"""

from typing import NamedTuple

from env_resolver.constants import DEFAULT_NAMESPACE, ENVIRONMENT_PROVIDER_KIND_PREFIX
from env_resolver.core.exceptions import InvalidInputError


class CompoundEntityRef(NamedTuple):
    kind: str
    namespace: str
    name: str


def parse_entity_ref(ref: str) -> CompoundEntityRef:
    """
    Split an entity reference into kind, namespace and name.

    Args:
        ref: Reference such as "awsenvironment:Test-Environment" or
            "awsenvironmentprovider:default/dev-ecs"

    Returns:
        CompoundEntityRef with the kind lower-cased

    Raises:
        InvalidInputError: If the kind or name is missing

    Example:
        >>> parse_entity_ref("awsenvironment:Test-Environment")
        CompoundEntityRef(kind='awsenvironment', namespace='default', name='Test-Environment')
    """
    if not ref or ":" not in ref:
        raise InvalidInputError(f"Entity reference '{ref}' has no kind")

    kind, _, rest = ref.partition(":")
    if "/" in rest:
        namespace, _, name = rest.partition("/")
    else:
        namespace, name = DEFAULT_NAMESPACE, rest

    if not kind or not name:
        raise InvalidInputError(f"Entity reference '{ref}' is malformed")

    return CompoundEntityRef(kind.lower(), namespace or DEFAULT_NAMESPACE, name)


def stringify_entity_ref(ref: CompoundEntityRef) -> str:
    return f"{ref.kind}:{ref.namespace}/{ref.name}"


def is_provider_ref(ref: str) -> bool:
    """
    Return True if the reference points at an environment provider entity.

    The match is case-sensitive: the catalog writes relation target refs
    with lower-case kinds.
    """
    return ref.startswith(ENVIRONMENT_PROVIDER_KIND_PREFIX)
