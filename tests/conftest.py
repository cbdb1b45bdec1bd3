# gitpush Test Fixtures
# Pytest fixtures for gitpush tests

import subprocess
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
import yaml


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("GITPUSH_CONFIG", raising=False)
    monkeypatch.delenv("GITPUSH_USERNAME", raising=False)
    monkeypatch.delenv("GITPUSH_PASSWORD", raising=False)
    return home


@pytest.fixture
def sample_config(temp_dir: Path) -> dict:
    """Create sample configuration dict."""
    return {
        "repository": {
            "path": str(temp_dir / "repo"),
            "timeout": 30,
        },
        "push": {
            "remote": "upstream",
            "push_tags": True,
            "push_all": False,
            "force": False,
            "credentials": {
                "username": "ci-bot",
                "password": "s3cret",
            },
        },
        "output": {"verbose": False, "colored": False},
    }


@pytest.fixture
def config_file(temp_home: Path, sample_config: dict) -> Path:
    """Create a configuration file."""
    config_dir = temp_home / ".config" / "gitpush"
    config_dir.mkdir(parents=True)
    config_path = config_dir / "config.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    return config_path


def _git(*args: str, cwd: Path) -> str:
    result = subprocess.run(
        ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


def commit_file(repo: Path, name: str, content: str) -> str:
    """Write a file, commit it and return the new HEAD."""
    (repo / name).write_text(content, encoding="utf-8")
    _git("add", name, cwd=repo)
    _git("commit", "-m", f"Update {name}", cwd=repo)
    return _git("rev-parse", "HEAD", cwd=repo)


@pytest.fixture
def remote_repo(temp_dir: Path, temp_home: Path) -> Path:
    """Bare repository acting as the remote."""
    bare = temp_dir / "remote.git"
    subprocess.run(["git", "init", "--bare", str(bare)], check=True, capture_output=True)
    return bare


@pytest.fixture
def clone_factory(temp_dir: Path, remote_repo: Path):
    """Create working clones of the remote with an initial commit pushed."""
    created: list[Path] = []

    def _clone(name: str) -> Path:
        dest = temp_dir / name
        subprocess.run(["git", "clone", str(remote_repo), str(dest)], check=True, capture_output=True)
        # Later clones check out the branch pushed by the first one
        if not created:
            commit_file(dest, "README.md", "initial\n")
            _git("push", "origin", "HEAD", cwd=dest)
        created.append(dest)
        return dest

    return _clone


@pytest.fixture
def commit():
    """Helper committing a file in a working clone."""
    return commit_file
