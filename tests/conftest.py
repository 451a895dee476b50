"""Pytest fixtures and utilities for compsync tests."""

import tempfile
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest

from compsync.config import SyncConfig
from compsync.data_loader import Catalog, clear_cache
from compsync.errors import NotFoundError


class FakeRegistry:
    """In-memory registry recording every fetch."""

    def __init__(
        self,
        contents: dict[str, bytes] | None = None,
        errors: dict[str, Exception] | None = None,
    ):
        self.contents = dict(contents or {})
        self.errors = dict(errors or {})
        self.fetched: list[str] = []

    async def fetch_content(self, name: str) -> bytes:
        self.fetched.append(name)
        if name in self.errors:
            raise self.errors[name]
        if name not in self.contents:
            raise NotFoundError(f"Failed to fetch {name}", name)
        return self.contents[name]

    async def list_available(self) -> set[str]:
        return set(self.contents)


@pytest.fixture(autouse=True)
def _clear_catalog_cache() -> Generator[None, None, None]:
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def out_dir(temp_dir: Path) -> Path:
    path = temp_dir / "components"
    path.mkdir()
    return path


@pytest.fixture
def config() -> SyncConfig:
    return SyncConfig(out_dir="components", package_manager="npm")


@pytest.fixture
def empty_catalog() -> Catalog:
    return Catalog()


@pytest.fixture
def fake_registry():
    """Factory for FakeRegistry instances."""

    def _create(contents=None, errors=None):
        return FakeRegistry(contents, errors)

    return _create


@pytest.fixture
def mock_tty() -> Generator[None, None, None]:
    """Mock sys.stdin.isatty to return True."""
    with patch("sys.stdin.isatty", return_value=True):
        yield


@pytest.fixture
def mock_no_tty() -> Generator[None, None, None]:
    """Mock sys.stdin.isatty to return False."""
    with patch("sys.stdin.isatty", return_value=False):
        yield
