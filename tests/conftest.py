"""Shared pytest fixtures for loading HTML test fixtures."""

from pathlib import Path

import pytest

from beachdata.fetch import clear_response_cache

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture()
def season_listing_html() -> str:
    return (FIXTURES_DIR / "season_listing.html").read_text(encoding="utf-8")


@pytest.fixture()
def livescore_fragment_html() -> str:
    return (FIXTURES_DIR / "livescore_fragment.html").read_text(encoding="utf-8")


@pytest.fixture()
def tournament_detail_html() -> str:
    return (FIXTURES_DIR / "tournament_detail.html").read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def _fresh_response_cache():
    clear_response_cache()
    yield
    clear_response_cache()
