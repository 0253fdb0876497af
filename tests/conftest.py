"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def docs_page_html() -> str:
    return _read_fixture("docs_page.html")


@pytest.fixture
def body_only_html() -> str:
    return _read_fixture("body_only.html")


@pytest.fixture
def not_found_html() -> str:
    return _read_fixture("not_found.html")
