"""Credential selection for push tasks.

A task owns a mutable PasswordCredentials object that can be configured
late. At push time it is turned into one of two handles: explicit
username/password, or an interactive handle that defers to a prompt
capability supplied by the host.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol, Union

from rich.console import Console
from rich.prompt import Prompt


@dataclass
class PasswordCredentials:
    """Username/password pair configured on a task."""

    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)

    def is_complete(self) -> bool:
        """True when both fields are set and non-empty."""
        return bool(self.username) and bool(self.password)


@dataclass(frozen=True)
class ExplicitCredentials:
    """Credentials passed straight to the transport."""

    username: str
    password: str = field(repr=False)


class CredentialPrompt(Protocol):
    """Capability that supplies credentials when none were configured."""

    def credentials_for(self, remote: str) -> Optional[ExplicitCredentials]:
        """Return credentials for the remote, or None to let git ask."""
        ...


@dataclass(frozen=True)
class InteractiveCredentials:
    """Credentials obtained at push time from a prompt capability."""

    prompt: CredentialPrompt


CredentialsHandle = Union[ExplicitCredentials, InteractiveCredentials]


class GitCredentialPrompt:
    """Leave authentication to git's configured helpers and terminal prompt."""

    def credentials_for(self, remote: str) -> Optional[ExplicitCredentials]:
        return None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, GitCredentialPrompt)

    def __hash__(self) -> int:
        return hash(GitCredentialPrompt)


class ConsolePrompt:
    """Ask for a username and password on the terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def credentials_for(self, remote: str) -> Optional[ExplicitCredentials]:
        self.console.print(f"[bold]Credentials for remote '{remote}'[/bold]")
        username = Prompt.ask("Username", console=self.console, default="", show_default=False)
        password = Prompt.ask("Password", console=self.console, password=True, default="", show_default=False)
        if not username or not password:
            return None
        return ExplicitCredentials(username, password)


class StaticPrompt:
    """Always answer with the same credentials."""

    def __init__(self, username: str, password: str):
        self._credentials = ExplicitCredentials(username, password)

    def credentials_for(self, remote: str) -> Optional[ExplicitCredentials]:
        return self._credentials


def resolve_credentials(
    stored: Optional[PasswordCredentials],
    prompt: Optional[CredentialPrompt] = None,
) -> CredentialsHandle:
    """
    Pick the credentials handle for a push.

    Args:
        stored: Credentials configured on the task, if any.
        prompt: Fallback capability, defaults to GitCredentialPrompt.

    Returns:
        ExplicitCredentials when both username and password are non-empty,
        otherwise InteractiveCredentials.
    """
    if stored is not None and stored.is_complete():
        return ExplicitCredentials(stored.username, stored.password)
    return InteractiveCredentials(prompt if prompt is not None else GitCredentialPrompt())
