# gitpush Git Module
# Repository queries and the push transport

from gitpush.git.operations import (
    AuthenticationError,
    GitError,
    RejectionError,
    TransportError,
    classify_push_failure,
    get_current_branch,
    get_repo_root,
    list_remotes,
    push_refs,
)

__all__ = [
    "GitError",
    "AuthenticationError",
    "RejectionError",
    "TransportError",
    "classify_push_failure",
    "get_repo_root",
    "get_current_branch",
    "list_remotes",
    "push_refs",
]
