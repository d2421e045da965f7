import sys
from pathlib import Path

import pytest

from gearworks_http import BaseService, ClientConfig

# Ensure local source package (src/gearworks_http) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    monkeypatch.delenv("GEARWORKS_BASE_URL", raising=False)
    monkeypatch.delenv("GEARWORKS_PROXY", raising=False)
    monkeypatch.delenv("GEARWORKS_TIMEOUT", raising=False)


@pytest.fixture
def base_url() -> str:
    return "https://example.com"


@pytest.fixture
def custom_header() -> tuple[str, str]:
    return ("General-Kenobi", "You are a bold one!")


@pytest.fixture
def skipped_header() -> str:
    return "skip-this-header"


@pytest.fixture
def config(
    base_url: str, custom_header: tuple[str, str], skipped_header: str
) -> ClientConfig:
    key, value = custom_header
    return ClientConfig(base_url=base_url, headers={key: value, skipped_header: None})


@pytest.fixture
def service(config: ClientConfig) -> BaseService:
    return BaseService(config)
