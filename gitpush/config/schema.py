# gitpush Configuration Schema
# Pydantic models for YAML configuration validation

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from gitpush.credentials import PasswordCredentials
from gitpush.remote import DEFAULT_REMOTE


class RepositoryConfig(BaseModel):
    """Repository the push runs from."""

    path: str = Field(default=".", description="Local repository path")
    timeout: Optional[float] = Field(default=None, gt=0, description="Seconds before a push is abandoned")

    @field_validator("path")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ in path."""
        return str(Path(v).expanduser())


class CredentialsConfig(BaseModel):
    """Explicit credentials; both fields are required for them to be used."""

    username: Optional[str] = Field(default=None, description="Username for the remote")
    password: Optional[str] = Field(default=None, repr=False, description="Password or access token")

    def to_credentials(self) -> Optional[PasswordCredentials]:
        """Return task credentials, or None when nothing is configured."""
        if self.username is None and self.password is None:
            return None
        return PasswordCredentials(username=self.username, password=self.password)


class PushConfig(BaseModel):
    """Push task settings."""

    remote: str = Field(default=DEFAULT_REMOTE, description="Destination remote name")
    push_tags: bool = Field(default=False, description="Include all tags")
    push_all: bool = Field(default=False, description="Push all local branches")
    force: bool = Field(default=False, description="Allow non-fast-forward updates")
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig, description="Explicit credentials")


class OutputConfig(BaseModel):
    """Output configuration."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")


class GitpushConfig(BaseModel):
    """Root configuration model for gitpush."""

    repository: RepositoryConfig = Field(default_factory=RepositoryConfig, description="Repository settings")
    push: PushConfig = Field(default_factory=PushConfig, description="Push settings")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")
