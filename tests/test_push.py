# Tests for gitpush.push
# Push request assembly, credential translation and failure wrapping

import shutil
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from gitpush.credentials import ExplicitCredentials, GitCredentialPrompt, InteractiveCredentials, StaticPrompt
from gitpush.git.operations import AuthenticationError, RejectionError, TransportError
from gitpush.push import (
    ALL_BRANCHES_REFSPEC,
    PASSWORD_ENV,
    PUSH_FAILED_MESSAGE,
    TAGS_REFSPEC,
    USERNAME_ENV,
    PushCommand,
    PushError,
    PushExecutor,
    PushRequest,
    PushState,
    credential_options,
)

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")

INTERACTIVE = InteractiveCredentials(GitCredentialPrompt())


class TestPushRequest:
    """Tests for PushRequest refspecs."""

    def test_current_branch_only(self):
        assert PushRequest("origin", INTERACTIVE).refspecs() == ["HEAD"]

    def test_with_tags(self):
        assert PushRequest("origin", INTERACTIVE, push_tags=True).refspecs() == ["HEAD", TAGS_REFSPEC]

    def test_all_branches(self):
        assert PushRequest("origin", INTERACTIVE, push_all=True).refspecs() == [ALL_BRANCHES_REFSPEC]

    def test_all_branches_and_tags(self):
        request = PushRequest("origin", INTERACTIVE, push_tags=True, push_all=True)
        assert request.refspecs() == [ALL_BRANCHES_REFSPEC, TAGS_REFSPEC]

    def test_immutable(self):
        request = PushRequest("origin", INTERACTIVE)
        with pytest.raises(AttributeError):
            request.force = True


class TestCredentialOptions:
    """Tests for credential_options."""

    def test_explicit(self):
        config, env = credential_options(ExplicitCredentials("ci", "token"), "origin")

        assert config[0] == "credential.helper="
        assert config[1].startswith("credential.helper=!")
        assert "token" not in " ".join(config)
        assert env[USERNAME_ENV] == "ci"
        assert env[PASSWORD_ENV] == "token"
        assert env["GIT_TERMINAL_PROMPT"] == "0"

    def test_interactive_defers_to_git(self):
        assert credential_options(INTERACTIVE, "origin") == ([], {})

    def test_interactive_prompt_answer_is_explicit(self):
        prompt = MagicMock()
        prompt.credentials_for.return_value = ExplicitCredentials("alice", "pw")

        config, env = credential_options(InteractiveCredentials(prompt), "upstream")

        prompt.credentials_for.assert_called_once_with("upstream")
        assert len(config) == 2
        assert env[USERNAME_ENV] == "alice"
        assert env[PASSWORD_ENV] == "pw"

    def test_unknown_handle(self):
        with pytest.raises(TypeError):
            credential_options(object(), "origin")


class TestPushError:
    """Tests for PushError."""

    def test_fixed_message(self):
        cause = RejectionError("rejected")
        err = PushError(cause)
        assert str(err) == PUSH_FAILED_MESSAGE == "Problem pushing to repository."
        assert err.cause is cause


class TestPushCommand:
    """Tests for PushCommand with a mocked transport."""

    @patch("gitpush.push.push_refs")
    def test_scenario_current_branch_to_origin(self, mock_push):
        command = PushCommand(PushRequest("origin", INTERACTIVE), Path("/repo"))
        assert command.state is PushState.BUILDING

        command.call()

        mock_push.assert_called_once_with(
            "origin", ["HEAD"], Path("/repo"), force=False, config=[], env=None, timeout=None
        )
        assert command.state is PushState.SUCCEEDED

    @patch("gitpush.push.push_refs")
    def test_tags_in_scope(self, mock_push):
        PushCommand(PushRequest("origin", INTERACTIVE, push_tags=True)).call()
        assert TAGS_REFSPEC in mock_push.call_args.args[1]

    @patch("gitpush.push.push_refs")
    def test_force_and_timeout(self, mock_push):
        PushCommand(PushRequest("origin", INTERACTIVE, force=True), timeout=12).call()
        assert mock_push.call_args.kwargs["force"] is True
        assert mock_push.call_args.kwargs["timeout"] == 12

    @patch("gitpush.push.push_refs")
    def test_explicit_credentials_reach_environment(self, mock_push, monkeypatch):
        monkeypatch.setenv("KEEP_ME", "1")
        PushCommand(PushRequest("origin", ExplicitCredentials("ci", "token"))).call()

        env = mock_push.call_args.kwargs["env"]
        assert env["KEEP_ME"] == "1"
        assert env[USERNAME_ENV] == "ci"
        assert env[PASSWORD_ENV] == "token"

    @pytest.mark.parametrize("error_cls", [AuthenticationError, RejectionError, TransportError])
    @patch("gitpush.push.push_refs")
    def test_transport_failure_wrapped(self, mock_push, error_cls):
        cause = error_cls("git push to origin failed", stderr="details")
        mock_push.side_effect = cause
        command = PushCommand(PushRequest("origin", INTERACTIVE))

        with pytest.raises(PushError) as exc_info:
            command.call()

        assert str(exc_info.value) == "Problem pushing to repository."
        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause
        assert command.state is PushState.FAILED
        mock_push.assert_called_once()

    @patch("gitpush.push.push_refs")
    def test_static_prompt_credentials(self, mock_push):
        PushCommand(PushRequest("origin", InteractiveCredentials(StaticPrompt("ci", "token")))).call()
        assert mock_push.call_args.kwargs["env"][PASSWORD_ENV] == "token"

    @patch("gitpush.push.push_refs")
    def test_prompt_failure_not_wrapped(self, mock_push):
        prompt = MagicMock()
        prompt.credentials_for.side_effect = KeyboardInterrupt
        command = PushCommand(PushRequest("origin", InteractiveCredentials(prompt)))

        with pytest.raises(KeyboardInterrupt):
            command.call()
        assert command.state is PushState.FAILED
        mock_push.assert_not_called()

    @patch("gitpush.push.push_refs")
    def test_one_shot(self, mock_push):
        command = PushCommand(PushRequest("origin", INTERACTIVE))
        command.call()
        with pytest.raises(RuntimeError, match="already succeeded"):
            command.call()
        assert mock_push.call_count == 1


class TestPushExecutor:
    """Tests for PushExecutor."""

    @patch("gitpush.push.push_refs")
    def test_execute_builds_request(self, mock_push):
        executor = PushExecutor(Path("/repo"), timeout=3)
        executor.execute("upstream", INTERACTIVE, push_tags=True, push_all=True, force=True)

        mock_push.assert_called_once_with(
            "upstream",
            [ALL_BRANCHES_REFSPEC, TAGS_REFSPEC],
            Path("/repo"),
            force=True,
            config=[],
            env=None,
            timeout=3,
        )

    @patch("gitpush.push.push_refs", side_effect=TransportError("unreachable"))
    def test_execute_failure(self, mock_push):
        with pytest.raises(PushError):
            PushExecutor().execute("origin", INTERACTIVE)

    @patch("gitpush.push.push_refs")
    def test_no_state_between_calls(self, mock_push):
        executor = PushExecutor()
        executor.execute("origin", INTERACTIVE)
        executor.execute("origin", INTERACTIVE)
        assert mock_push.call_count == 2


def _rev(git_dir: Path, ref: str) -> str:
    result = subprocess.run(
        ["git", "--git-dir", str(git_dir), "rev-parse", "--verify", "--quiet", ref],
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


def _branch(repo: Path) -> str:
    return subprocess.run(
        ["git", "rev-parse", "--abbrev-ref", "HEAD"], cwd=repo, check=True, capture_output=True, text=True
    ).stdout.strip()


@requires_git
class TestPushAgainstRepository:
    """End-to-end pushes into a local bare repository."""

    def test_pushes_current_branch(self, clone_factory, remote_repo, commit):
        work = clone_factory("work")
        head = commit(work, "a.txt", "a\n")

        PushExecutor(work).execute("origin", INTERACTIVE)

        assert _rev(remote_repo, f"refs/heads/{_branch(work)}") == head

    def test_pushes_tags_only_when_asked(self, clone_factory, remote_repo):
        work = clone_factory("work")
        subprocess.run(["git", "tag", "v1.0"], cwd=work, check=True)

        PushExecutor(work).execute("origin", INTERACTIVE)
        assert _rev(remote_repo, "refs/tags/v1.0") == ""

        PushExecutor(work).execute("origin", INTERACTIVE, push_tags=True)
        assert _rev(remote_repo, "refs/tags/v1.0") != ""

    def test_pushes_all_branches(self, clone_factory, remote_repo):
        work = clone_factory("work")
        subprocess.run(["git", "branch", "feature"], cwd=work, check=True)

        PushExecutor(work).execute("origin", INTERACTIVE, push_all=True)

        assert _rev(remote_repo, "refs/heads/feature") != ""

    def test_explicit_credentials(self, clone_factory, remote_repo, commit):
        work = clone_factory("work")
        head = commit(work, "b.txt", "b\n")

        PushExecutor(work).execute("origin", ExplicitCredentials("ci", "token"))

        assert _rev(remote_repo, f"refs/heads/{_branch(work)}") == head

    def test_non_fast_forward_rejected_then_forced(self, clone_factory, remote_repo, commit):
        first = clone_factory("first")
        second = clone_factory("second")
        branch = f"refs/heads/{_branch(first)}"

        published = commit(first, "first.txt", "1\n")
        PushExecutor(first).execute("origin", INTERACTIVE)
        diverged = commit(second, "second.txt", "2\n")

        with pytest.raises(PushError) as exc_info:
            PushExecutor(second).execute("origin", INTERACTIVE)
        assert isinstance(exc_info.value.cause, RejectionError)
        assert _rev(remote_repo, branch) == published

        PushExecutor(second).execute("origin", INTERACTIVE, force=True)
        assert _rev(remote_repo, branch) == diverged

    def test_unknown_remote(self, clone_factory):
        work = clone_factory("work")
        with pytest.raises(PushError) as exc_info:
            PushExecutor(work).execute("nowhere", INTERACTIVE)
        assert isinstance(exc_info.value.cause, TransportError)
