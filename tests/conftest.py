"""Pytest fixtures for fracture tests"""
import tempfile
from pathlib import Path

import git
import pytest

from fracture.config import Config
from fracture.models.repository import Repository
from fracture.services.repository_locator import detect_repository


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def fracture_home(temp_dir):
    """Isolated fracture home so tests never touch ~/.fracture."""
    return temp_dir / "home" / ".fracture"


@pytest.fixture
def config(fracture_home):
    """Configuration with dependency installs disabled."""
    return Config(fracture_home=fracture_home, shell="/bin/sh", install_deps=False)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository named `myapp` with `main` and `develop`."""
    repo_path = temp_dir / "myapp"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    try:
        repo.git.branch('-M', 'main')
    except Exception:
        pass

    repo.git.branch('develop')

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_origin(git_repo, temp_dir):
    """Repository whose `develop` branch also exists on a local bare `origin`."""
    origin_path = temp_dir / "origin.git"
    git.Repo.init(origin_path, bare=True)
    git_repo.create_remote('origin', str(origin_path))
    git_repo.git.push('origin', 'main', 'develop')
    yield git_repo


@pytest.fixture
def repository(git_repo, fracture_home) -> Repository:
    """Repository model for git_repo."""
    detected = detect_repository(git_repo.working_dir, fracture_home)
    assert detected is not None
    return detected


@pytest.fixture
def not_a_repo(temp_dir):
    """A plain directory outside any git repository."""
    path = temp_dir / "plain"
    path.mkdir()
    return path
