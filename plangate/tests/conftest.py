from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from plangate.tests.fakes import FakeBillingClient  # noqa: E402


@pytest.fixture
def billing_client() -> FakeBillingClient:
    return FakeBillingClient()
