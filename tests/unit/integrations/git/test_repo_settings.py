import shutil
from pathlib import Path

import git
import pytest

from reviewers_by_blame.core.config import ReviewersConfig
from reviewers_by_blame.integrations.git.repo_settings import load_repo_settings

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")

AUTHOR = git.Actor("Alice", "alice@example.com")


def _repo_with(tmp_path: Path, files: dict[str, str]) -> tuple[git.Repo, str]:
    repo = git.Repo.init(tmp_path / "work")
    for name, content in files.items():
        path = tmp_path / "work" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        repo.index.add([name])
    commit = repo.index.commit("settings", author=AUTHOR, committer=AUTHOR)
    return repo, commit.hexsha


def test_missing_file_uses_defaults(tmp_path):
    repo, sha = _repo_with(tmp_path, {"README.md": "hi\n"})
    defaults = ReviewersConfig(max_reviewers=2)

    assert load_repo_settings(repo, sha, defaults) is defaults


def test_repository_file_overrides_defaults(tmp_path):
    repo, sha = _repo_with(
        tmp_path,
        {
            ".github/reviewers-by-blame.yaml": (
                "max_reviewers: 1\n"
                "ignore_file_pattern: '.*\\.lock'\n"
                "ignore_drafts: false\n"
            )
        },
    )

    settings = load_repo_settings(repo, sha, ReviewersConfig())

    assert settings.max_reviewers == 1
    assert settings.ignore_file_pattern == r".*\.lock"
    assert settings.ignore_drafts is False
    assert settings.enabled is True


def test_repository_can_disable_selection(tmp_path):
    repo, sha = _repo_with(tmp_path, {".github/reviewers-by-blame.yaml": "enabled: false\n"})

    assert load_repo_settings(repo, sha, ReviewersConfig()).enabled is False


@pytest.mark.parametrize(
    "content",
    [
        "max_reviewers: [1\n",
        "- just\n- a list\n",
        "max_reviewers: many\n",
        "max_reviewers: 0\n",
        "max_reviewers: -1\n",
        "ignore_file_pattern: '['\nmax_reviewers: 0\n",
        "ignore_subject_pattern: '(unclosed'\n",
        "ignore_drafts: 'false'\n",
        "enabled: 'false'\n",
    ],
)
def test_unusable_file_falls_back_to_defaults(tmp_path, content):
    repo, sha = _repo_with(tmp_path, {".github/reviewers-by-blame.yaml": content})
    defaults = ReviewersConfig()

    assert load_repo_settings(repo, sha, defaults) is defaults
