"""테스트 공통 fixture"""

import sys
from collections.abc import Callable

import httpx
import pytest
import structlog

from readme_builder.core.config import Settings
from readme_builder.domain.profile.schemas import (
    CommitSummary,
    LanguageSummary,
    Profile,
    ProfileReport,
    PullRequestSummary,
    Repository,
)
from readme_builder.domain.profile.service import compute_language_shares
from readme_builder.infra.github.client import GitHubClient


@pytest.fixture(autouse=True)
def logs_to_stderr():
    """setup_logging 없이 찍히는 로그도 stdout에 섞이지 않도록 stderr로 출력"""
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(sys.stderr))
    yield
    structlog.reset_defaults()


@pytest.fixture
def settings() -> Settings:
    """테스트용 설정 - 요청 간 대기 없음"""
    return Settings(
        username="octocat",
        github_token="test-token-123",
        contact_email="octocat@example.com",
        page_delay=0,
        language_delay=0,
        _env_file=None,
    )


@pytest.fixture
def make_client(settings) -> Callable:
    """MockTransport 핸들러로 GitHubClient 생성 helper

    handler가 받은 요청은 반환된 리스트에 기록된다.
    """

    def _create(handler: Callable[[httpx.Request], httpx.Response]):
        requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
        return GitHubClient(settings, http_client=http_client), requests

    return _create


def _repo_payload(name: str, owner: str = "octocat", **overrides) -> dict:
    """GitHub 레포지토리 API 응답 형태"""
    payload = {
        "name": name,
        "full_name": f"{owner}/{name}",
        "fork": False,
        "archived": False,
        "pushed_at": "2024-03-01T10:00:00Z",
        "language": "Python",
        "description": f"{name} description",
        "html_url": f"https://github.com/{owner}/{name}",
        "languages_url": f"https://api.github.com/repos/{owner}/{name}/languages",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def repo_payload() -> Callable[..., dict]:
    """레포지토리 응답 생성 helper"""
    return _repo_payload


@pytest.fixture
def sample_profile() -> Profile:
    return Profile(
        login="octocat",
        name="The Octocat",
        bio="Building things",
        public_repos=3,
        html_url="https://github.com/octocat",
    )


@pytest.fixture
def sample_repositories() -> list[Repository]:
    return [
        Repository.model_validate(_repo_payload("alpha", pushed_at="2024-03-05T10:00:00Z")),
        Repository.model_validate(_repo_payload("beta", pushed_at="2024-03-10T10:00:00Z")),
        Repository.model_validate(
            _repo_payload("old", pushed_at="2023-01-01T00:00:00Z", archived=True)
        ),
        Repository.model_validate(_repo_payload("octocat", pushed_at="2024-04-01T00:00:00Z")),
    ]


@pytest.fixture
def sample_pull_requests() -> list[PullRequestSummary]:
    return [
        PullRequestSummary(
            number=42,
            title="Fix | pipe handling",
            state="open",
            url="https://github.com/other/lib/pull/42",
            repo="other/lib",
            updated_at="2024-03-12T08:30:00Z",
        )
    ]


@pytest.fixture
def sample_commits() -> list[CommitSummary]:
    return [
        CommitSummary(
            sha="abc1234def",
            message="Add parser",
            repo="octocat/alpha",
            url="https://github.com/octocat/alpha/commit/abc1234def",
            created_at="2024-03-11T09:00:00Z",
        )
    ]


@pytest.fixture
def sample_report(
    sample_profile, sample_repositories, sample_pull_requests, sample_commits
) -> ProfileReport:
    totals = {"Python": 9000, "C": 1000, "Makefile": 1}
    return ProfileReport(
        profile=sample_profile,
        repositories=sample_repositories,
        languages=LanguageSummary(
            totals=totals,
            total_bytes=sum(totals.values()),
            analyzed_repos=2,
            shares=compute_language_shares(totals),
        ),
        pull_requests=sample_pull_requests,
        commits=sample_commits,
    )
