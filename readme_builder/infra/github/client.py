import asyncio
import time

import httpx

from readme_builder.core.config import Settings
from readme_builder.core.exceptions import HttpError, RateLimitError
from readme_builder.core.logging import get_logger
from readme_builder.domain.profile.schemas import Profile, Repository

logger = get_logger(__name__)

RATE_LIMIT_STATUS = 403
RATE_LIMIT_RESET_HEADER = "X-RateLimit-Reset"
USER_AGENT = "readme-builder"


def _get_headers(token: str, api_version: str) -> dict[str, str]:
    """GitHub API 요청 헤더 생성

    Args:
        token: GitHub 토큰
        api_version: X-GitHub-Api-Version 값

    Returns:
        HTTP 헤더 딕셔너리
    """
    return {
        "Accept": "application/vnd.github+json",
        "Authorization": f"Bearer {token}",
        "X-GitHub-Api-Version": api_version,
        "User-Agent": USER_AGENT,
    }


def compute_rate_limit_wait(reset_header: str | None, now: float, fallback: float) -> float:
    """rate limit 해제까지 대기할 초 계산

    Args:
        reset_header: X-RateLimit-Reset 헤더 값 (epoch 초)
        now: 현재 epoch 초
        fallback: 헤더가 없거나 숫자가 아닐 때 대기 시간

    Returns:
        대기 시간(초)
    """
    if not reset_header:
        return fallback
    try:
        reset_epoch = int(float(reset_header))
    except (ValueError, OverflowError):
        return fallback
    return max(0, reset_epoch - int(now)) + 1


async def _pause(seconds: float) -> None:
    """요청 간 대기"""
    if seconds > 0:
        await asyncio.sleep(seconds)


def repo_full_name_from_api_url(repository_url: str) -> str:
    """레포지토리 API URL의 마지막 두 경로에서 owner/name 추출"""
    return "/".join(repository_url.rstrip("/").split("/")[-2:])


class GitHubClient:
    """GitHub REST API 클라이언트

    모든 요청에 인증/버전 헤더를 붙이고, 403 응답은 rate limit으로 보고
    제한된 횟수만큼 재시도한다.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None):
        self.settings = settings
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=settings.github_timeout)
        self._headers = _get_headers(settings.github_token, settings.github_api_version)

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """직접 생성한 httpx 클라이언트 종료"""
        if self._owns_client:
            await self._client.aclose()

    def _absolute_url(self, url: str) -> str:
        if url.startswith(("http://", "https://")):
            return url
        return f"{self.settings.github_api_base.rstrip('/')}/{url.lstrip('/')}"

    async def request_json(self, url: str, params: dict | None = None):
        """GET 요청 후 JSON 응답 반환

        Args:
            url: 절대 URL 또는 API base 기준 경로
            params: 쿼리 파라미터

        Returns:
            파싱된 JSON 본문

        Raises:
            RateLimitError: 재시도 횟수를 모두 소진한 403 응답
            HttpError: 그 외 2xx가 아닌 응답
        """
        url = self._absolute_url(url)
        retries_left = self.settings.github_max_retries

        while True:
            response = await self._client.get(url, headers=self._headers, params=params)

            if response.status_code == RATE_LIMIT_STATUS:
                if retries_left <= 0:
                    logger.error("rate limit 재시도 소진", url=url)
                    raise RateLimitError(
                        response.status_code, response.reason_phrase, response.text, url
                    )
                wait_seconds = compute_rate_limit_wait(
                    response.headers.get(RATE_LIMIT_RESET_HEADER),
                    time.time(),
                    self.settings.rate_limit_fallback_wait,
                )
                logger.warning(
                    "rate limit 감지, 대기 후 재시도",
                    url=url,
                    wait_seconds=wait_seconds,
                    retries_left=retries_left,
                )
                await _pause(wait_seconds)
                retries_left -= 1
                continue

            if not response.is_success:
                raise HttpError(response.status_code, response.reason_phrase, response.text, url)

            return response.json()

    async def fetch_paginated(
        self, url: str, params: dict | None = None, page_size: int | None = None
    ) -> list:
        """페이지 단위 목록을 마지막 페이지까지 조회

        페이지 크기보다 적은 항목(빈 페이지 포함)이 오면 종료한다.

        Args:
            url: 목록 엔드포인트
            params: 페이지 외 고정 쿼리 파라미터
            page_size: 페이지 크기, 기본값은 설정값

        Returns:
            받은 순서대로 이어 붙인 항목 리스트
        """
        page_size = page_size or self.settings.github_page_size
        items: list = []
        page = 1

        while True:
            page_params = {**(params or {}), "per_page": page_size, "page": page}
            chunk = await self.request_json(url, params=page_params)
            items.extend(chunk)
            logger.debug("페이지 조회", url=url, page=page, count=len(chunk))

            if len(chunk) < page_size:
                break
            page += 1
            await _pause(self.settings.page_delay)

        return items

    async def get_user(self, login: str) -> Profile:
        """사용자 프로필 조회"""
        data = await self.request_json(f"/users/{login}")
        logger.info("프로필 조회 완료", login=login)
        return Profile.model_validate(data)

    async def list_repositories(self, login: str) -> list[Repository]:
        """fork를 제외한 전체 공개 레포지토리 조회

        Args:
            login: GitHub 유저네임

        Returns:
            최근 갱신 순 레포지토리 목록
        """
        data = await self.fetch_paginated(
            f"/users/{login}/repos",
            params={"sort": "updated", "direction": "desc"},
        )
        repos = [Repository.model_validate(item) for item in data if not item.get("fork")]
        logger.info("레포지토리 조회 완료", login=login, total=len(data), non_fork=len(repos))
        return repos

    async def get_languages(self, languages_url: str) -> dict[str, int]:
        """레포지토리 언어별 바이트 수 조회"""
        return await self.request_json(languages_url)

    async def search_pull_requests(self, login: str, per_page: int) -> list[dict]:
        """작성한 공개 PR을 생성일 역순으로 검색"""
        data = await self.request_json(
            "/search/issues",
            params={
                "q": f"is:pr author:{login} is:public",
                "sort": "created",
                "order": "desc",
                "per_page": per_page,
            },
        )
        items = data.get("items", [])
        logger.info("PR 검색 완료", login=login, count=len(items))
        return items

    async def get_public_events(self, login: str) -> list[dict]:
        """최근 공개 이벤트 피드 조회, 페이지네이션 없음"""
        events = await self.request_json(f"/users/{login}/events/public")
        logger.info("이벤트 조회 완료", login=login, count=len(events))
        return events
