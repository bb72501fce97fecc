"""
프로필 README 생성 CLI

GitHub 공개 활동을 조회해 README.md를 만들고, 내용이 바뀐 경우에만 쓴다.
"""

import argparse
import asyncio
import sys

from readme_builder.core.config import Settings, load_settings
from readme_builder.core.exceptions import ConfigError
from readme_builder.core.logging import bind_run_id, get_logger, setup_logging
from readme_builder.domain.profile.renderer import build_readme
from readme_builder.domain.profile.schemas import ProfileReport
from readme_builder.domain.profile.service import (
    aggregate_languages,
    get_recent_commits,
    get_recent_pull_requests,
)
from readme_builder.domain.profile.writer import write_if_changed
from readme_builder.infra.github.client import GitHubClient

logger = get_logger(__name__)


async def collect_report(client: GitHubClient, settings: Settings) -> ProfileReport:
    """README에 필요한 GitHub 데이터 수집

    레포지토리 목록을 모두 받은 뒤 언어를 집계하고,
    PR과 커밋은 서로 독립적이라 동시에 조회한다.
    한쪽이 실패하면 다른 쪽은 취소되고 첫 번째 예외가 그대로 전파된다.
    """
    login = settings.username
    profile = await client.get_user(login)
    repositories = await client.list_repositories(login)
    languages = await aggregate_languages(client, repositories, settings.language_delay)

    try:
        async with asyncio.TaskGroup() as tg:
            pr_task = tg.create_task(get_recent_pull_requests(client, login, settings.recent_limit))
            commit_task = tg.create_task(
                get_recent_commits(client, login, settings.recent_limit, settings.github_web_base)
            )
    except ExceptionGroup as eg:
        raise eg.exceptions[0] from None

    return ProfileReport(
        profile=profile,
        repositories=repositories,
        languages=languages,
        pull_requests=pr_task.result(),
        commits=commit_task.result(),
    )


async def run(settings: Settings, dry_run: bool = False) -> bool:
    """README 생성 1회 실행

    Args:
        settings: 검증된 설정
        dry_run: True면 파일을 쓰지 않고 stdout으로 출력

    Returns:
        README 파일을 새로 썼으면 True
    """
    logger.info("README 생성 시작", username=settings.username)
    async with GitHubClient(settings) as client:
        report = await collect_report(client, settings)

    readme = build_readme(report, settings)
    if dry_run:
        sys.stdout.write(readme)
        return False
    return write_if_changed(settings.output_path, readme)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readme-builder",
        description="Render a GitHub profile README from public account activity",
    )
    parser.add_argument("--output", help="README output path (default: OUTPUT_PATH or README.md)")
    parser.add_argument("--username", help="GitHub login (default: USERNAME)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the rendered README instead of writing it",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI 진입점, 종료 코드 반환"""
    args = create_parser().parse_args(argv)

    overrides = {}
    if args.output:
        overrides["output_path"] = args.output
    if args.username:
        overrides["username"] = args.username

    try:
        settings = load_settings(**overrides)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    setup_logging(settings.log_level, json_logs=settings.is_production)
    with bind_run_id():
        try:
            asyncio.run(run(settings, dry_run=args.dry_run))
        except Exception as e:
            logger.exception("README 생성 실패", error_type=type(e).__name__)
            print(f"error: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
