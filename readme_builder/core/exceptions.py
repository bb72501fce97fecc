from enum import Enum


class ErrorCode(str, Enum):
    """에러 코드 열거형"""

    CONFIG_MISSING = "CONFIG_MISSING"
    GITHUB_API_ERROR = "GITHUB_API_ERROR"
    GITHUB_RATE_LIMITED = "GITHUB_RATE_LIMITED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ReadmeBuilderError(Exception):
    def __init__(
        self,
        error_code: ErrorCode | str,
        message: str,
        detail: str | None = None,
    ):
        self.error_code = error_code
        self.message = message
        self.detail = detail
        super().__init__(message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class ConfigError(ReadmeBuilderError):
    def __init__(self, detail: str | None = None):
        super().__init__(
            error_code=ErrorCode.CONFIG_MISSING,
            message="필수 설정이 없습니다",
            detail=detail,
        )


class HttpError(ReadmeBuilderError):
    """2xx가 아닌 GitHub API 응답"""

    def __init__(
        self,
        status_code: int,
        status_text: str,
        body: str,
        url: str,
        error_code: ErrorCode = ErrorCode.GITHUB_API_ERROR,
    ):
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        self.url = url
        super().__init__(
            error_code=error_code,
            message=f"{status_code} {status_text} :: {url}",
            detail=body or None,
        )


class RateLimitError(HttpError):
    """재시도 횟수를 모두 소진한 rate limit 응답"""

    def __init__(self, status_code: int, status_text: str, body: str, url: str):
        super().__init__(
            status_code=status_code,
            status_text=status_text,
            body=body,
            url=url,
            error_code=ErrorCode.GITHUB_RATE_LIMITED,
        )
