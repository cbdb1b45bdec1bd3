# gitpush Git Operations
# Git command execution and the push transport

import subprocess
from pathlib import Path
from typing import Optional


class GitError(Exception):
    """Exception raised for git operation errors."""

    def __init__(self, message: str, returncode: int = 1, stderr: str = ""):
        self.message = message
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class AuthenticationError(GitError):
    """The remote rejected the supplied credentials."""


class RejectionError(GitError):
    """The remote refused to update one or more refs."""


class TransportError(GitError):
    """The remote could not be reached or does not exist."""


# Substrings of git's stderr, checked in order
_AUTH_MARKERS = (
    "authentication failed",
    "could not read username",
    "could not read password",
    "invalid username or password",
    "permission denied",
    "permission to",
    "the requested url returned error: 401",
    "the requested url returned error: 403",
)

_REJECTION_MARKERS = (
    "[rejected]",
    "[remote rejected]",
    "non-fast-forward",
    "fetch first",
    "updates were rejected",
)


def classify_push_failure(stderr: str) -> type[GitError]:
    """
    Map git push stderr output to the matching error type.

    Args:
        stderr: Error output of the failed push.

    Returns:
        AuthenticationError, RejectionError or TransportError.
    """
    lowered = stderr.lower()
    if any(marker in lowered for marker in _AUTH_MARKERS):
        return AuthenticationError
    if any(marker in lowered for marker in _REJECTION_MARKERS):
        return RejectionError
    return TransportError


def _run_git(
    *args: str,
    cwd: Optional[Path] = None,
    check: bool = True,
    capture_output: bool = True,
) -> subprocess.CompletedProcess[str]:
    """
    Run a git command.

    Args:
        *args: Git command arguments.
        cwd: Working directory.
        check: Whether to raise on non-zero exit.
        capture_output: Whether to capture stdout/stderr.

    Returns:
        CompletedProcess with result.

    Raises:
        GitError: If command fails and check is True.
    """
    cmd = ["git", *args]
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            check=False,
            capture_output=capture_output,
            text=True,
        )
        if check and result.returncode != 0:
            raise GitError(
                f"Git command failed: {' '.join(cmd)}",
                returncode=result.returncode,
                stderr=result.stderr.strip() if result.stderr else "",
            )
        return result
    except FileNotFoundError:
        raise GitError("git command not found. Is git installed?")


def get_repo_root(path: Optional[Path] = None) -> Optional[Path]:
    """
    Get the root directory of a git repository.

    Args:
        path: Starting path (defaults to current directory).

    Returns:
        Path to repo root, or None if not in a repo.
    """
    try:
        result = _run_git("rev-parse", "--show-toplevel", cwd=path)
        return Path(result.stdout.strip())
    except GitError:
        return None


def get_current_branch(path: Optional[Path] = None) -> Optional[str]:
    """
    Get current branch name.

    Args:
        path: Repository path.

    Returns:
        Branch name or None if detached.
    """
    try:
        result = _run_git("rev-parse", "--abbrev-ref", "HEAD", cwd=path)
        branch = result.stdout.strip()
        return None if branch == "HEAD" else branch
    except GitError:
        return None


def list_remotes(path: Optional[Path] = None) -> list[str]:
    """
    List configured remote names.

    Args:
        path: Repository path.

    Returns:
        Remote names, empty if none or not a repository.
    """
    try:
        result = _run_git("remote", cwd=path)
    except GitError:
        return []
    return [line.strip() for line in result.stdout.splitlines() if line.strip()]


def push_refs(
    remote: str,
    refspecs: list[str],
    path: Optional[Path] = None,
    *,
    force: bool = False,
    config: Optional[list[str]] = None,
    env: Optional[dict[str, str]] = None,
    timeout: Optional[float] = None,
) -> subprocess.CompletedProcess[str]:
    """
    Run `git push` for the given refspecs and block until it finishes.

    Args:
        remote: Remote name or URL.
        refspecs: Refspecs that make up the push scope.
        path: Repository path.
        force: Allow non-fast-forward updates.
        config: `key=value` settings passed through `git -c`.
        env: Complete environment for the git process (None inherits).
        timeout: Seconds before the push is abandoned.

    Returns:
        CompletedProcess with result.

    Raises:
        AuthenticationError: Credentials were rejected.
        RejectionError: The remote refused a ref update.
        TransportError: Anything else, including timeouts and a missing git.
    """
    cmd = ["git"]
    for setting in config or []:
        cmd.extend(["-c", setting])
    cmd.append("push")
    if force:
        cmd.append("--force")
    cmd.append(remote)
    cmd.extend(refspecs)

    try:
        result = subprocess.run(
            cmd,
            cwd=path,
            check=False,
            capture_output=True,
            text=True,
            env=env,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise TransportError("git command not found. Is git installed?")
    except subprocess.TimeoutExpired:
        raise TransportError(f"git push timed out after {timeout} seconds")

    if result.returncode != 0:
        stderr = result.stderr.strip() if result.stderr else ""
        error_cls = classify_push_failure(stderr)
        raise error_cls(
            f"git push to {remote} failed",
            returncode=result.returncode,
            stderr=stderr,
        )
    return result
