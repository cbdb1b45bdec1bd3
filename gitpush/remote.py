"""Remote name resolution for push tasks."""

from collections.abc import Callable
from typing import Union

DEFAULT_REMOTE = "origin"

# A literal name, a zero-argument callable producing one, or unset
RemoteSpec = Union[str, Callable[[], object], None]


def resolve_remote(spec: RemoteSpec) -> str:
    """Resolve a remote spec to a remote name.

    Callables are evaluated on every call so that configuration changed
    between setup and execution is picked up. Anything they raise
    propagates unchanged.

    Args:
        spec: Literal remote name, deferred callable, or None

    Returns:
        The remote name, "origin" when unset
    """
    if spec is None:
        return DEFAULT_REMOTE
    if isinstance(spec, str):
        return spec
    if callable(spec):
        value = spec()
        return value if isinstance(value, str) else str(value)
    return str(spec)
