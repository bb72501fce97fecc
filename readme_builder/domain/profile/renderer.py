from datetime import datetime, timezone
from urllib.parse import quote_plus

from readme_builder.core.config import Settings
from readme_builder.domain.profile import templates
from readme_builder.domain.profile.schemas import (
    CommitSummary,
    LanguageShare,
    ProfileReport,
    PullRequestSummary,
    Repository,
)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def md_link(text: str, url: str) -> str:
    return f"[{text}]({url})"


def escape_cell(value: object) -> str:
    """Markdown 표 셀에서 | 이스케이프"""
    return ("" if value is None else str(value)).replace("|", "\\|")


def truncate(text: str, limit: int) -> str:
    """limit을 넘으면 limit-1자 + 말줄임표"""
    return text[: limit - 1] + "… " if len(text) > limit else text


def format_percent(percent: float) -> str:
    return f"{percent:.1f}%"


def format_date(value: datetime) -> str:
    """UTC 기준 '05 Mar 2024' 형식"""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%d %b %Y")


def render_skills_grid(
    icons: list[tuple[str, str]] = templates.SKILL_ICONS,
    columns: int = templates.SKILL_GRID_COLUMNS,
    size: int = templates.SKILL_ICON_SIZE,
) -> str:
    rows = []
    for start in range(0, len(icons), columns):
        cells = "".join(
            templates.SKILL_CELL.format(
                src=f"{templates.DEVICON_BASE}/{path}", size=size, alt=alt
            )
            for path, alt in icons[start : start + columns]
        )
        rows.append(f"<tr>{cells}</tr>")
    return f"<table><tbody>{''.join(rows)}</tbody></table>"


def render_typing_banner(lines: list[str]) -> str:
    encoded = ";".join(quote_plus(line, safe="()") for line in lines)
    return templates.TYPING_BANNER.format(lines=encoded)


def select_active_projects(repos: list[Repository], login: str, limit: int) -> list[Repository]:
    """아카이브와 프로필 레포를 제외하고 최근 push 순으로 limit개 선택"""
    profile_repo_name = login.lower()
    candidates = [
        repo
        for repo in repos
        if not repo.archived and repo.name.lower() != profile_repo_name
    ]
    candidates.sort(key=lambda repo: repo.pushed_at or _OLDEST, reverse=True)
    return candidates[:limit]


def render_active_projects(repos: list[Repository]) -> str:
    rows = [templates.ACTIVE_PROJECTS_HEADER]
    for repo in repos:
        owner, _, name = repo.full_name.partition("/")
        cell = md_link(repo.name, repo.html_url)
        if repo.description:
            cell += f"<br/><sub>{escape_cell(repo.description)}</sub>"
        rows.append(
            templates.ACTIVE_PROJECT_ROW.format(
                repo=cell, shields=templates.SHIELDS_BASE, owner=owner, name=name
            )
        )
    return "\n".join(rows)


def render_pull_requests(prs: list[PullRequestSummary]) -> str:
    if not prs:
        return templates.EMPTY_PULL_REQUESTS_MESSAGE
    return "\n".join(
        templates.PULL_REQUEST_ITEM.format(
            link=md_link(f"#{pr.number} {escape_cell(pr.title)}", pr.url),
            repo=pr.repo,
            state=pr.state.upper(),
            date=format_date(pr.updated_at),
        )
        for pr in prs
    )


def render_commits(commits: list[CommitSummary]) -> str:
    if not commits:
        return templates.EMPTY_COMMITS_MESSAGE
    return "\n".join(
        templates.COMMIT_ITEM.format(
            link=md_link(
                truncate(escape_cell(commit.message), templates.COMMIT_MESSAGE_MAX_LENGTH),
                commit.url,
            ),
            repo=commit.repo,
            date=format_date(commit.created_at),
        )
        for commit in commits
    )


def render_languages(shares: list[LanguageShare], min_percent: float) -> str:
    """min_percent 미만 언어는 표에서 숨김"""
    rows = [
        templates.LANGUAGE_ROW.format(
            language=escape_cell(share.language),
            percent=format_percent(share.percent),
            byte_count=f"{share.byte_count:,}",
        )
        for share in shares
        if share.percent >= min_percent
    ]
    if not rows:
        return templates.EMPTY_LANGUAGES_MESSAGE
    return templates.LANGUAGE_TABLE.format(rows="\n".join(rows))


def render_footer(report: ProfileReport) -> str:
    last_activity = report.last_activity_at
    if last_activity is None:
        return templates.FOOTER_WITHOUT_ACTIVITY
    return templates.FOOTER_WITH_ACTIVITY.format(date=format_date(last_activity))


def build_readme(report: ProfileReport, settings: Settings) -> str:
    """수집한 데이터로 README Markdown 생성

    같은 입력이면 항상 같은 문자열을 반환한다 (현재 시각을 쓰지 않음).

    Args:
        report: 수집된 프로필 데이터
        settings: 표시 문구와 제한값

    Returns:
        README 본문
    """
    profile = report.profile
    login = profile.login
    active = select_active_projects(
        report.repositories, login, settings.active_projects_limit
    )

    readme = templates.README.format(
        login=login,
        display_name=profile.display_name,
        bio=escape_cell(profile.bio) if profile.bio else settings.default_bio,
        typing=render_typing_banner(settings.typing_lines),
        skills=render_skills_grid(),
        cards=templates.STATS_CARDS.format(login=login, width=templates.STATS_CARD_WIDTH),
        snake=templates.SNAKE.format(login=login),
        active_count=settings.active_projects_limit,
        active_projects=render_active_projects(active),
        pull_requests=render_pull_requests(report.pull_requests),
        commits=render_commits(report.commits),
        languages=render_languages(report.languages.shares, settings.min_language_percent),
        email=settings.contact_email,
        profile_link=md_link(login, profile.html_url),
        footer=render_footer(report),
    )
    return readme.strip() + "\n"
