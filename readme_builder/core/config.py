from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from readme_builder.core.exceptions import ConfigError


class Settings(BaseSettings):
    """README 생성기 설정"""

    environment: str = "development"

    # 대상 계정
    username: str = "GonxKZ"
    contact_email: str = "gonzalo_kzz@hotmail.com"

    # GitHub - 토큰은 필수, load_settings에서 검증
    github_token: str = ""
    github_api_base: str = "https://api.github.com"
    github_web_base: str = "https://github.com"
    github_api_version: str = "2022-11-28"
    github_timeout: float = 30.0

    # Rate limit 재시도 설정
    github_max_retries: int = 3
    rate_limit_fallback_wait: float = 30.0

    # 페이지네이션 / 요청 간격 (초)
    github_page_size: int = 100
    page_delay: float = 0.1
    language_delay: float = 0.06

    # 출력 설정
    output_path: str = "README.md"
    recent_limit: int = 5
    active_projects_limit: int = 5
    min_language_percent: float = 0.05

    # 표시 문구
    default_bio: str = (
        "Software Engineer · Low-level (C/C++), Artificial Intelligence, "
        "Cybersecurity. Performance."
    )
    typing_lines: list[str] = [
        "Systems & Low-level (C/C++)",
        "Artificial Intelligence",
        "Optimization & Performance",
        "Continuous learning",
    ]

    # 로깅 설정
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @field_validator("username", "github_token", "contact_email")
    @classmethod
    def strip_whitespace(cls, value: str) -> str:
        return value.strip()

    def validate_required(self) -> list[str]:
        """필수 설정 검증 후 누락된 항목 반환"""
        errors = []
        if not self.github_token:
            errors.append("GITHUB_TOKEN")
        if not self.username:
            errors.append("USERNAME")
        return errors


def load_settings(**overrides) -> Settings:
    """환경 변수에서 설정을 한 번 읽어 검증

    Args:
        overrides: 환경 변수보다 우선하는 설정 값

    Returns:
        검증된 Settings

    Raises:
        ConfigError: 필수 설정이 누락된 경우
    """
    settings = Settings(**overrides)
    missing = settings.validate_required()
    if missing:
        raise ConfigError(detail=", ".join(missing))
    return settings
