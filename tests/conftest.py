"""Shared fixtures: harvest config, cache directory and a recording sleep."""

from __future__ import annotations

import pytest

from helpers import BASE_URL, RecordingSleep
from scraper.pkpindex.config import HarvestConfig


@pytest.fixture
def config(tmp_path) -> HarvestConfig:
    return HarvestConfig(
        cache_dir=tmp_path / "cache",
        tag="2020-03-01",
        base_url=BASE_URL,
        sleep=0.0,
    )


@pytest.fixture
def target(config):
    path = config.cache_dir / config.tag
    path.mkdir(parents=True)
    return path


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()
