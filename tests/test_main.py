import json
import os

import pytest

import main as cli
from RepoSync.Business import SyncBusiness as business_module
from RepoSync.Business.SyncBusiness import SyncBusiness
from RepoSync.Exception.GitHubError import GitHubError, MissingCredentialError
from RepoSync.GitHub.GitHubClient import GitHubClient


class RecordingClient:
    def __init__(self, repo_data, fail=False):
        self.repo_data = repo_data
        self.fail = fail
        self.calls = []

    def get_repo(self, repo_full_name):
        self.calls.append(("get", repo_full_name))
        if self.fail:
            raise GitHubError("Bad credentials", 401)
        return dict(self.repo_data)

    def update_repo(self, repo_full_name, **fields):
        self.calls.append(("update", fields))

    def replace_all_topics(self, repo_full_name, names):
        self.calls.append(("topics", list(names)))


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("INPUT_TOKEN", "GITHUB_TOKEN", "GH_TOKEN", "GITHUB_REPOSITORY",
                 "GITHUB_SERVER_URL", "GITHUB_ACTIONS", "GITHUB_API_URL", "GITHUB_API_ROOT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def project(tmp_path):
    (tmp_path / "package.json").write_text(json.dumps({
        "description": "A test package",
        "homepage": "https://example.com",
        "keywords": ["a", "b"],
    }), encoding="utf-8")
    return tmp_path


def install_client(monkeypatch, client):
    monkeypatch.setattr(business_module, "GitHubClient", lambda token=None, api_root=None: client)


def test_sync_business_requires_token(clean_env):
    with pytest.raises(MissingCredentialError):
        SyncBusiness(None)


def test_sync_business_resolves_and_syncs(clean_env, project):
    client = RecordingClient({"description": None, "homepage": None, "topics": ["b", "a"]})
    business = SyncBusiness("token", client=client)
    result = business.SyncRepository("owner/repo", base_dir=project)
    assert business.metadata.description == "A test package"
    assert business.resolver.sources == ["package.json"]
    assert [u.field for u in result.updates] == ["description", "homepage"]
    assert ("topics", ["a", "b"]) not in client.calls


def test_main_success(clean_env, project, monkeypatch, capsys):
    client = RecordingClient({"description": "A test package", "homepage": "https://example.com", "topics": ["a", "b"]})
    install_client(monkeypatch, client)
    status = cli.main(["--repo", "owner/repo", "--token", "t", "--directory", str(project)])
    assert status == 0
    assert client.calls == [("get", "owner/repo")]
    out = capsys.readouterr().out
    assert "No changes needed" in out
    assert "package.json" in out


def test_main_reads_repository_from_environment(clean_env, project, monkeypatch, capsys):
    monkeypatch.setenv("GITHUB_REPOSITORY", "env-owner/env-repo")
    monkeypatch.setenv("GITHUB_TOKEN", "t")
    client = RecordingClient({"description": None, "homepage": None, "topics": []})
    install_client(monkeypatch, client)
    assert cli.main(["--directory", str(project)]) == 0
    assert client.calls[0] == ("get", "env-owner/env-repo")
    assert "Updated: description, homepage, topics" in capsys.readouterr().out


def test_main_dry_run(clean_env, project, monkeypatch, capsys):
    client = RecordingClient({"description": None, "homepage": None, "topics": []})
    install_client(monkeypatch, client)
    assert cli.main(["--repo", "owner/repo", "--token", "t", "--directory", str(project), "--dry-run"]) == 0
    assert client.calls == [("get", "owner/repo")]
    assert "Would update" in capsys.readouterr().out


def test_main_missing_token(clean_env, project, capsys):
    status = cli.main(["--repo", "owner/repo", "--directory", str(project)])
    assert status == 1
    assert "Action failed with error: GitHub token is required" in capsys.readouterr().err


def test_main_missing_repository(clean_env, project, capsys):
    assert cli.main(["--token", "t", "--directory", str(project)]) == 1
    assert "Repository not specified" in capsys.readouterr().err


def test_main_remote_failure_reports_error(clean_env, project, monkeypatch, capsys):
    install_client(monkeypatch, RecordingClient({}, fail=True))
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    status = cli.main(["--repo", "owner/repo", "--token", "t", "--directory", str(project)])
    assert status == 1
    assert "::error::Action failed with error: Bad credentials" in capsys.readouterr().out


def test_main_loads_env_file(clean_env, project, monkeypatch):
    (project / ".env").write_text("GITHUB_TOKEN=from-dotenv\nGITHUB_REPOSITORY=dot/env\n", encoding="utf-8")
    client = RecordingClient({"description": "A test package", "homepage": "https://example.com", "topics": ["a", "b"]})
    install_client(monkeypatch, client)
    try:
        assert cli.main(["--directory", str(project)]) == 0
        assert client.calls == [("get", "dot/env")]
    finally:
        os.environ.pop("GITHUB_TOKEN", None)
        os.environ.pop("GITHUB_REPOSITORY", None)


class HeaderSession:
    def __init__(self):
        self.headers = {}


def test_checkout_env_file_cannot_redirect_api(clean_env, project, monkeypatch):
    (project / ".env").write_text(
        "GITHUB_API_URL=https://attacker.invalid\nGITHUB_SERVER_URL=https://attacker.invalid\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("GITHUB_TOKEN", "user-secret")
    built = {}

    def make_client(token=None, api_root=None):
        built["base"] = GitHubClient(token=token, session=HeaderSession(), api_root=api_root).base
        return RecordingClient({"description": "A test package", "homepage": "https://example.com", "topics": ["a", "b"]})

    monkeypatch.setattr(business_module, "GitHubClient", make_client)
    assert cli.main(["--repo", "owner/repo", "--directory", str(project)]) == 0
    assert built["base"] == "https://api.github.com"
    assert "GITHUB_API_URL" not in os.environ
    assert "GITHUB_SERVER_URL" not in os.environ
