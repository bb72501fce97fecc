import asyncio
from collections.abc import Iterable

import httpx

from readme_builder.core.exceptions import HttpError
from readme_builder.core.logging import get_logger
from readme_builder.domain.profile.schemas import (
    CommitSummary,
    LanguageShare,
    LanguageSummary,
    PullRequestSummary,
    Repository,
)
from readme_builder.infra.github.client import GitHubClient, repo_full_name_from_api_url

logger = get_logger(__name__)

PUSH_EVENT = "PushEvent"
EMPTY_COMMIT_MESSAGE = "(no message)"
SEARCH_OVERFETCH = 10


def _profile_repo(login: str) -> str:
    """프로필 레포지토리 full name (소문자)"""
    return f"{login}/{login}".lower()


def compute_language_shares(totals: dict[str, int]) -> list[LanguageShare]:
    """언어별 비율 계산 후 바이트 수 내림차순 정렬.

    동일 바이트 수는 처음 등장한 순서를 유지한다.

    Args:
        totals: 언어별 누적 바이트 수

    Returns:
        정렬된 LanguageShare 목록
    """
    total_bytes = sum(totals.values())
    shares = [
        LanguageShare(
            language=language,
            byte_count=byte_count,
            percent=(byte_count * 100 / total_bytes) if total_bytes else 0.0,
        )
        for language, byte_count in totals.items()
    ]
    return sorted(shares, key=lambda share: share.byte_count, reverse=True)


async def aggregate_languages(
    client: GitHubClient,
    repositories: Iterable[Repository],
    delay: float = 0.0,
) -> LanguageSummary:
    """레포지토리별 언어 바이트 수를 순차적으로 합산.

    한 레포지토리의 조회 실패는 경고 로그 후 건너뛴다.

    Args:
        client: GitHub 클라이언트
        repositories: 집계 대상 레포지토리
        delay: 성공한 조회 뒤 대기 시간(초)

    Returns:
        언어 집계 결과
    """
    totals: dict[str, int] = {}
    analyzed = 0
    skipped: list[str] = []

    for repo in repositories:
        try:
            languages = await client.get_languages(repo.languages_url)
        except (HttpError, httpx.TransportError) as e:
            logger.warning("언어 조회 실패, 건너뜀", repo=repo.full_name, error=str(e))
            skipped.append(repo.full_name)
            continue

        for language, byte_count in languages.items():
            totals[language] = totals.get(language, 0) + int(byte_count)
        analyzed += 1
        if delay > 0:
            await asyncio.sleep(delay)

    total_bytes = sum(totals.values())
    logger.info(
        "언어 집계 완료",
        analyzed=analyzed,
        skipped=len(skipped),
        languages=len(totals),
        total_bytes=total_bytes,
    )
    return LanguageSummary(
        totals=totals,
        total_bytes=total_bytes,
        analyzed_repos=analyzed,
        skipped_repos=skipped,
        shares=compute_language_shares(totals),
    )


def select_pull_requests(items: list[dict], login: str, limit: int) -> list[PullRequestSummary]:
    """검색 결과에서 프로필 레포 PR을 제외하고 앞에서 limit개 선택."""
    profile_repo = _profile_repo(login)
    prs = []
    for item in items:
        repo = repo_full_name_from_api_url(item["repository_url"])
        if repo.lower() == profile_repo:
            continue
        prs.append(
            PullRequestSummary(
                number=item["number"],
                title=item["title"],
                state=item["state"],
                url=item["html_url"],
                repo=repo,
                updated_at=item["updated_at"],
            )
        )
        if len(prs) >= limit:
            break
    return prs


def select_commits(
    events: list[dict],
    login: str,
    limit: int,
    web_base: str = "https://github.com",
) -> list[CommitSummary]:
    """이벤트 피드에서 PushEvent 커밋을 최신순으로 최대 limit개 추출.

    limit에 도달하면 이벤트 중간이라도 즉시 중단한다.
    """
    profile_repo = _profile_repo(login)
    commits: list[CommitSummary] = []

    for event in events:
        if len(commits) >= limit:
            break
        payload_commits = (event.get("payload") or {}).get("commits") or []
        if event.get("type") != PUSH_EVENT or not payload_commits:
            continue
        repo = event["repo"]["name"]
        if repo.lower() == profile_repo:
            continue

        for commit in payload_commits:
            sha = commit["sha"]
            commits.append(
                CommitSummary(
                    sha=sha,
                    message=commit.get("message") or EMPTY_COMMIT_MESSAGE,
                    repo=repo,
                    url=f"{web_base.rstrip('/')}/{repo}/commit/{sha}",
                    created_at=event["created_at"],
                )
            )
            if len(commits) >= limit:
                break

    return commits


async def get_recent_pull_requests(
    client: GitHubClient, login: str, limit: int = 5
) -> list[PullRequestSummary]:
    """최근 공개 PR 조회 (프로필 레포 제외)"""
    items = await client.search_pull_requests(login, per_page=limit + SEARCH_OVERFETCH)
    prs = select_pull_requests(items, login, limit)
    logger.info("최근 PR 추출 완료", login=login, count=len(prs))
    return prs


async def get_recent_commits(
    client: GitHubClient,
    login: str,
    limit: int = 5,
    web_base: str = "https://github.com",
) -> list[CommitSummary]:
    """최근 push 커밋 조회 (프로필 레포 제외)"""
    events = await client.get_public_events(login)
    commits = select_commits(events, login, limit, web_base)
    logger.info("최근 커밋 추출 완료", login=login, count=len(commits))
    return commits
