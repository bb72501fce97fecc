from pathlib import Path

from readme_builder.core.logging import get_logger

logger = get_logger(__name__)


def load_readme(path: str | Path) -> str:
    """기존 README 내용, 파일이 없으면 빈 문자열"""
    path = Path(path)
    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8")


def write_if_changed(path: str | Path, content: str) -> bool:
    """앞뒤 공백을 제외한 내용이 다를 때만 파일 작성

    Args:
        path: 출력 파일 경로
        content: 새 README 내용

    Returns:
        파일을 새로 썼으면 True
    """
    path = Path(path)
    previous = load_readme(path)
    if previous.strip() == content.strip():
        logger.info("README 변경 없음", path=str(path))
        return False

    path.write_text(content, encoding="utf-8")
    logger.info("README 갱신", path=str(path), size=len(content))
    return True
