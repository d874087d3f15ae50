from __future__ import annotations

import pytest

from fakes import ManualReactor


@pytest.fixture
def reactor() -> ManualReactor:
    return ManualReactor()
