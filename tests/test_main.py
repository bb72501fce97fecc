"""readme_builder/main.py 테스트"""

import asyncio
import os
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from readme_builder.core.exceptions import HttpError
from readme_builder.infra.github.client import GitHubClient
from readme_builder.main import collect_report, main, run


def _client_factory(handler):
    """MockTransport를 쓰는 GitHubClient 생성자 (GitHubClient 패치용)"""

    def create(settings):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return GitHubClient(settings, http_client=http_client)

    return create


@pytest.fixture
def github_api(repo_payload):
    """프로필/레포/언어/PR/이벤트 엔드포인트를 흉내내는 핸들러"""
    routes = {
        "/users/octocat": {
            "login": "octocat",
            "name": "The Octocat",
            "bio": None,
            "public_repos": 3,
            "html_url": "https://github.com/octocat",
        },
        "/users/octocat/repos": [
            repo_payload("alpha", pushed_at="2024-03-05T10:00:00Z"),
            repo_payload("forked", fork=True),
            repo_payload("gone", pushed_at="2024-02-01T10:00:00Z"),
        ],
        "/repos/octocat/alpha/languages": {"Python": 900, "Shell": 100},
        "/search/issues": {
            "items": [
                {
                    "number": 7,
                    "title": "Self PR",
                    "state": "closed",
                    "html_url": "https://github.com/octocat/octocat/pull/7",
                    "repository_url": "https://api.github.com/repos/octocat/octocat",
                    "updated_at": "2024-03-03T00:00:00Z",
                },
                {
                    "number": 8,
                    "title": "Upstream fix",
                    "state": "open",
                    "html_url": "https://github.com/other/lib/pull/8",
                    "repository_url": "https://api.github.com/repos/other/lib",
                    "updated_at": "2024-03-04T00:00:00Z",
                },
            ]
        },
        "/users/octocat/events/public": [
            {
                "type": "PushEvent",
                "repo": {"name": "octocat/alpha"},
                "created_at": "2024-03-05T09:00:00Z",
                "payload": {"commits": [{"sha": "a1b2c3d4", "message": "Add parser"}]},
            }
        ],
    }

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/repos/octocat/gone/languages":
            return httpx.Response(404, text='{"message": "Not Found"}')
        if request.url.path not in routes:
            return httpx.Response(500)
        return httpx.Response(200, json=routes[request.url.path])

    return handler


class TestCollectReport:
    """collect_report 함수 테스트"""

    @pytest.mark.asyncio
    async def test_collects_all_sections(self, make_client, github_api, settings):
        """한 레포 언어 조회 실패는 건너뛰고 나머지 수집"""
        client, requests = make_client(github_api)

        report = await collect_report(client, settings)

        assert report.profile.display_name == "The Octocat"
        assert [r.name for r in report.repositories] == ["alpha", "gone"]
        assert report.languages.totals == {"Python": 900, "Shell": 100}
        assert report.languages.skipped_repos == ["octocat/gone"]
        assert [pr.number for pr in report.pull_requests] == [8]
        assert [c.sha for c in report.commits] == ["a1b2c3d4"]

        paths = [r.url.path for r in requests]
        assert paths.index("/users/octocat/repos") < paths.index("/repos/octocat/alpha/languages")

    @pytest.mark.asyncio
    async def test_whole_run_endpoint_failure_aborts(self, make_client, settings):
        """프로필 조회 실패는 전체 실패"""
        client, _ = make_client(lambda request: httpx.Response(500, text="oops"))

        with pytest.raises(HttpError):
            await collect_report(client, settings)

    @pytest.mark.asyncio
    async def test_failed_extractor_cancels_sibling(self, make_client, github_api, settings):
        """PR 조회가 실패하면 커밋 조회는 취소되고 원래 예외가 전파"""
        client, _ = make_client(github_api)
        commits_cancelled = asyncio.Event()
        error = HttpError(422, "Unprocessable Entity", "", "https://api.github.com/search/issues")

        async def failing_pull_requests(*args):
            await asyncio.sleep(0)
            raise error

        async def pending_commits(*args):
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                commits_cancelled.set()
                raise

        with (
            patch(
                "readme_builder.main.get_recent_pull_requests",
                new_callable=AsyncMock,
                side_effect=failing_pull_requests,
            ),
            patch(
                "readme_builder.main.get_recent_commits",
                new_callable=AsyncMock,
                side_effect=pending_commits,
            ),
        ):
            with pytest.raises(HttpError) as exc_info:
                await collect_report(client, settings)

        assert exc_info.value is error
        assert commits_cancelled.is_set()


class TestRun:
    """run 함수 테스트"""

    @pytest.mark.asyncio
    async def test_second_run_does_not_rewrite(self, settings, github_api, tmp_path):
        """같은 데이터로 두 번 실행하면 파일을 다시 쓰지 않음"""
        output = tmp_path / "README.md"
        run_settings = settings.model_copy(update={"output_path": str(output)})

        with patch("readme_builder.main.GitHubClient", side_effect=_client_factory(github_api)):
            assert await run(run_settings) is True
            first = output.read_text(encoding="utf-8")
            os.utime(output, (1_000_000, 1_000_000))

            assert await run(run_settings) is False

        assert output.read_text(encoding="utf-8") == first
        assert output.stat().st_mtime == 1_000_000
        assert "[#8 Upstream fix](https://github.com/other/lib/pull/8)" in first
        assert "Self PR" not in first

    @pytest.mark.asyncio
    async def test_dry_run_prints(self, settings, tmp_path, capsys):
        run_settings = settings.model_copy(update={"output_path": str(tmp_path / "README.md")})
        report = MagicMock()

        with (
            patch("readme_builder.main.collect_report", new_callable=AsyncMock, return_value=report),
            patch("readme_builder.main.build_readme", return_value="# rendered\n"),
        ):
            written = await run(run_settings, dry_run=True)

        assert written is False
        assert capsys.readouterr().out == "# rendered\n"
        assert not (tmp_path / "README.md").exists()


class TestMain:
    """CLI 진입점 테스트"""

    @pytest.fixture(autouse=True)
    def isolated_env(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        with patch("readme_builder.main.setup_logging"):
            yield

    def test_missing_token_exits_before_network(self, capsys):
        """토큰이 없으면 네트워크 호출 전에 종료 코드 1"""
        with patch("readme_builder.main.run", new_callable=AsyncMock) as mock_run:
            exit_code = main([])

        assert exit_code == 1
        mock_run.assert_not_called()
        assert "GITHUB_TOKEN" in capsys.readouterr().err

    def test_success(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")

        with patch("readme_builder.main.run", new_callable=AsyncMock, return_value=True) as mock_run:
            exit_code = main(["--output", "out.md", "--username", "someone"])

        assert exit_code == 0
        settings = mock_run.await_args.args[0]
        assert settings.github_token == "env-token"
        assert settings.output_path == "out.md"
        assert settings.username == "someone"
        assert mock_run.await_args.kwargs == {"dry_run": False}

    def test_unrecovered_http_error_exits_nonzero(self, monkeypatch, capsys):
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        error = HttpError(502, "Bad Gateway", "upstream", "https://api.github.com/users/x")

        with patch("readme_builder.main.run", new_callable=AsyncMock, side_effect=error):
            exit_code = main([])

        assert exit_code == 1
        assert "502 Bad Gateway" in capsys.readouterr().err

    def test_dry_run_stdout_is_only_readme(self, monkeypatch, capsys, github_api, tmp_path):
        """--dry-run 출력에 로그가 섞이지 않음"""
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        monkeypatch.setenv("USERNAME", "octocat")
        monkeypatch.setenv("PAGE_DELAY", "0")
        monkeypatch.setenv("LANGUAGE_DELAY", "0")

        with patch("readme_builder.main.GitHubClient", side_effect=_client_factory(github_api)):
            exit_code = main(["--dry-run"])

        captured = capsys.readouterr()
        assert exit_code == 0
        assert captured.out.startswith("<!-- Profile: octocat")
        assert "README 생성 시작" not in captured.out
        assert not (tmp_path / "README.md").exists()
