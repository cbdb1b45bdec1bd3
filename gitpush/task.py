"""Push task: configuration knobs plus the push action."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Optional, Union

from gitpush.credentials import (
    CredentialPrompt,
    CredentialsHandle,
    ExplicitCredentials,
    PasswordCredentials,
    resolve_credentials,
)
from gitpush.output.console import Console
from gitpush.push import PushExecutor, PushRequest
from gitpush.remote import RemoteSpec, resolve_remote

CredentialsConfigurer = Union[Callable[[PasswordCredentials], Any], Mapping[str, Any]]


class PushTask:
    """Pushes the repository's current state to a remote.

    Settings may be changed freely until push() runs; the remote and the
    credentials are resolved when the push starts.
    """

    def __init__(
        self,
        repo_path: Optional[Path] = None,
        *,
        remote: RemoteSpec = None,
        credentials: Optional[PasswordCredentials] = None,
        push_tags: bool = False,
        push_all: bool = False,
        force: bool = False,
        prompt: Optional[CredentialPrompt] = None,
        timeout: Optional[float] = None,
        console: Optional[Console] = None,
    ):
        """Initialize the task.

        Args:
            repo_path: Repository to push from, current directory if None
            remote: Remote name or callable producing one, "origin" if None
            credentials: Explicit credentials
            push_tags: Include all tags
            push_all: Push all local branches
            force: Allow non-fast-forward updates
            prompt: Fallback used when credentials are incomplete
            timeout: Seconds before the push is abandoned
            console: Where progress messages go, silent if None
        """
        self.repo_path = repo_path
        self._remote: RemoteSpec = remote
        self._credentials = credentials
        self.push_tags = push_tags
        self.push_all = push_all
        self.force = force
        self.prompt = prompt
        self.timeout = timeout
        self.console = console

    @property
    def remote(self) -> str:
        """Remote to push to, resolved on every access."""
        return resolve_remote(self._remote)

    @remote.setter
    def remote(self, value: RemoteSpec) -> None:
        self._remote = value

    def get_credentials(self) -> Optional[PasswordCredentials]:
        """Credentials configured on the task, if any."""
        return self._credentials

    def set_credentials(self, credentials: Optional[PasswordCredentials]) -> None:
        """Replace the task credentials."""
        self._credentials = credentials

    def credentials(self, configure: CredentialsConfigurer) -> PasswordCredentials:
        """Configure the task credentials, creating them on first use.

        Args:
            configure: Callable receiving the credentials, or a mapping of
                attribute values to set on them

        Returns:
            The task's credentials object
        """
        if self._credentials is None:
            self._credentials = PasswordCredentials(username="", password="")
        creds = self._credentials

        if isinstance(configure, Mapping):
            for name, value in configure.items():
                if name not in ("username", "password"):
                    raise AttributeError(f"Unknown credentials attribute: {name}")
                setattr(creds, name, value)
        else:
            configure(creds)
        return creds

    def credentials_handle(self) -> CredentialsHandle:
        """Credentials handle the next push would use."""
        return resolve_credentials(self._credentials, self.prompt)

    def build_request(self) -> PushRequest:
        """Resolve every setting into a push request."""
        remote = self.remote
        handle = self.credentials_handle()
        return PushRequest(
            remote=remote,
            credentials=handle,
            push_tags=self.push_tags,
            push_all=self.push_all,
            force=self.force,
        )

    def inputs(self) -> dict[str, Any]:
        """Resolved task inputs without any secret."""
        request = self.build_request()
        explicit = isinstance(request.credentials, ExplicitCredentials)
        return {
            "repository": str(self.repo_path or Path.cwd()),
            "remote": request.remote,
            "auth": "explicit" if explicit else "interactive",
            "username": request.credentials.username if explicit else None,
            "refspecs": request.refspecs(),
            "push_tags": request.push_tags,
            "push_all": request.push_all,
            "force": request.force,
        }

    def push(self) -> None:
        """Push to the remote.

        Raises:
            PushError: The transport failed
        """
        request = self.build_request()
        if self.console:
            self.console.print_info(f"Pushing to {request.remote}...")
            self.console.print_debug(f"Refspecs: {' '.join(request.refspecs())}")
        PushExecutor(self.repo_path, timeout=self.timeout).run(request)
        if self.console:
            self.console.print_success(f"Pushed to {request.remote}")
