# gitpush Push Executor
# Assembles a push request and runs it through the git transport

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from gitpush.credentials import CredentialsHandle, ExplicitCredentials, InteractiveCredentials
from gitpush.git.operations import GitError, push_refs

PUSH_FAILED_MESSAGE = "Problem pushing to repository."

CURRENT_BRANCH_REFSPEC = "HEAD"
ALL_BRANCHES_REFSPEC = "refs/heads/*:refs/heads/*"
TAGS_REFSPEC = "refs/tags/*:refs/tags/*"

USERNAME_ENV = "GITPUSH_USERNAME"
PASSWORD_ENV = "GITPUSH_PASSWORD"

# Secrets come from the child environment, never argv
_CREDENTIAL_HELPER = (
    "!f() { test \"$1\" = get || exit 0; "
    f"echo \"username=${{{USERNAME_ENV}}}\"; "
    f"echo \"password=${{{PASSWORD_ENV}}}\"; }}; f"
)


class PushError(Exception):
    """A push failed; the transport error is kept as the cause."""

    def __init__(self, cause: Optional[BaseException] = None):
        self.message = PUSH_FAILED_MESSAGE
        self.cause = cause
        super().__init__(PUSH_FAILED_MESSAGE)


class PushState(str, Enum):
    """Lifecycle of a single push command."""

    BUILDING = "building"
    EXECUTING = "executing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class PushRequest:
    """Fully resolved description of one push."""

    remote: str
    credentials: CredentialsHandle
    push_tags: bool = False
    push_all: bool = False
    force: bool = False

    def refspecs(self) -> list[str]:
        """Refspecs making up the push scope."""
        specs = [ALL_BRANCHES_REFSPEC if self.push_all else CURRENT_BRANCH_REFSPEC]
        if self.push_tags:
            specs.append(TAGS_REFSPEC)
        return specs


def credential_options(
    credentials: CredentialsHandle,
    remote: str,
) -> tuple[list[str], dict[str, str]]:
    """
    Translate a credentials handle into git settings and environment.

    Args:
        credentials: Resolved credentials handle.
        remote: Remote being pushed to, passed to interactive prompts.

    Returns:
        Tuple of (git -c settings, extra environment variables).
    """
    if isinstance(credentials, InteractiveCredentials):
        answered = credentials.prompt.credentials_for(remote)
        if answered is None:
            return [], {}
        credentials = answered

    if isinstance(credentials, ExplicitCredentials):
        # An empty helper entry drops helpers configured elsewhere
        config = ["credential.helper=", f"credential.helper={_CREDENTIAL_HELPER}"]
        env = {
            USERNAME_ENV: credentials.username,
            PASSWORD_ENV: credentials.password,
            "GIT_TERMINAL_PROMPT": "0",
        }
        return config, env

    raise TypeError(f"Unsupported credentials handle: {type(credentials).__name__}")


class PushCommand:
    """
    One-shot push against a repository.

    Each instance runs at most once and ends in SUCCEEDED or FAILED.
    """

    def __init__(
        self,
        request: PushRequest,
        repo_path: Optional[Path] = None,
        *,
        timeout: Optional[float] = None,
    ):
        self.request = request
        self.repo_path = repo_path
        self.timeout = timeout
        self.state = PushState.BUILDING

    def call(self) -> None:
        """
        Run the push, blocking until git finishes.

        Raises:
            PushError: Any transport failure, with the GitError as cause.
            RuntimeError: The command was already run.
        """
        if self.state is not PushState.BUILDING:
            raise RuntimeError(f"Push command already {self.state.value}")

        request = self.request
        self.state = PushState.EXECUTING
        try:
            config, extra_env = credential_options(request.credentials, request.remote)
            env = {**os.environ, **extra_env} if extra_env else None
            push_refs(
                request.remote,
                request.refspecs(),
                self.repo_path,
                force=request.force,
                config=config,
                env=env,
                timeout=self.timeout,
            )
        except GitError as e:
            self.state = PushState.FAILED
            raise PushError(e) from e
        except BaseException:
            self.state = PushState.FAILED
            raise
        # TODO: report progress to the console once git's --progress output is parsed
        self.state = PushState.SUCCEEDED


class PushExecutor:
    """Runs push requests against one repository."""

    def __init__(self, repo_path: Optional[Path] = None, *, timeout: Optional[float] = None):
        self.repo_path = repo_path
        self.timeout = timeout

    def execute(
        self,
        remote: str,
        credentials: CredentialsHandle,
        *,
        push_tags: bool = False,
        push_all: bool = False,
        force: bool = False,
    ) -> None:
        """
        Push to a remote.

        Args:
            remote: Resolved remote name.
            credentials: Resolved credentials handle.
            push_tags: Include all tags.
            push_all: Push all local branches instead of the current one.
            force: Allow non-fast-forward updates.

        Raises:
            PushError: The push failed.
        """
        request = PushRequest(
            remote=remote,
            credentials=credentials,
            push_tags=push_tags,
            push_all=push_all,
            force=force,
        )
        self.run(request)

    def run(self, request: PushRequest) -> None:
        """Run an already built request."""
        PushCommand(request, self.repo_path, timeout=self.timeout).call()
