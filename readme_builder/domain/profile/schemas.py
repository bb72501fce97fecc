from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict


class _Snapshot(BaseModel):
    """API 응답 스냅샷 공통 설정, 생성 후 변경 불가"""

    model_config = ConfigDict(frozen=True, extra="ignore")


class Profile(_Snapshot):
    """GitHub 사용자 프로필"""

    login: str
    name: str | None = None
    bio: str | None = None
    public_repos: int = 0
    html_url: str
    blog: str | None = None
    company: str | None = None
    location: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.login


class Repository(_Snapshot):
    """레포지토리 정보"""

    name: str
    full_name: str
    fork: bool = False
    archived: bool = False
    pushed_at: datetime | None = None
    language: str | None = None
    description: str | None = None
    html_url: str
    languages_url: str


class LanguageShare(_Snapshot):
    """언어별 바이트 수와 비율"""

    language: str
    byte_count: int
    percent: float


class LanguageSummary(_Snapshot):
    """레포지토리 언어 집계 결과"""

    totals: dict[str, int]
    total_bytes: int
    analyzed_repos: int
    skipped_repos: list[str] = []
    shares: list[LanguageShare]


class PullRequestSummary(_Snapshot):
    """최근 PR 요약"""

    number: int
    title: str
    state: Literal["open", "closed"]
    url: str
    repo: str
    updated_at: datetime


class CommitSummary(_Snapshot):
    """최근 커밋 요약"""

    sha: str
    message: str
    repo: str
    url: str
    created_at: datetime

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


class ProfileReport(_Snapshot):
    """README 렌더링에 필요한 전체 데이터"""

    profile: Profile
    repositories: list[Repository]
    languages: LanguageSummary
    pull_requests: list[PullRequestSummary]
    commits: list[CommitSummary]

    @property
    def last_activity_at(self) -> datetime | None:
        """레포 push, PR 갱신, 커밋 이벤트 중 가장 최근 시각"""
        timestamps = [r.pushed_at for r in self.repositories if r.pushed_at]
        timestamps += [pr.updated_at for pr in self.pull_requests]
        timestamps += [c.created_at for c in self.commits]
        return max(timestamps) if timestamps else None
