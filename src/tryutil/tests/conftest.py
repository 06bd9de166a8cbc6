from __future__ import annotations

import logging
import os
from collections.abc import Iterator

import pytest

from tryutil.config import clear_settings_cache
from tryutil.result import _warn_invalid_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop TRYUTIL_* variables and reload settings around every test."""
    for name in list(os.environ):
        if name.startswith("TRYUTIL_"):
            monkeypatch.delenv(name)
    clear_settings_cache()
    _warn_invalid_settings.cache_clear()
    yield
    clear_settings_cache()
    logging.getLogger("tryutil").setLevel(logging.NOTSET)
