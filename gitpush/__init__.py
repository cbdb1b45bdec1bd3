"""gitpush - push repository state to a remote as a build step.

Resolves the destination remote, the credentials and the ref scope from
configuration at execution time, then runs a single `git push`.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "PushTask",
    "PushRequest",
    "PushError",
    "PushExecutor",
    "PasswordCredentials",
    "ExplicitCredentials",
    "InteractiveCredentials",
    "resolve_credentials",
    "resolve_remote",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name == "PushTask":
        from gitpush.task import PushTask

        return PushTask
    if name in ("PushRequest", "PushError", "PushExecutor"):
        from gitpush import push

        return getattr(push, name)
    if name in ("PasswordCredentials", "ExplicitCredentials", "InteractiveCredentials", "resolve_credentials"):
        from gitpush import credentials

        return getattr(credentials, name)
    if name == "resolve_remote":
        from gitpush.remote import resolve_remote

        return resolve_remote
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
