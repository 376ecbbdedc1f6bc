from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from ventureai.kernel.time import UTC, coerce_utc, is_tz_aware, utc_now

pytestmark = [pytest.mark.unit]


def test_utc_now_is_aware():
    assert is_tz_aware(utc_now())


def test_coerce_naive_assumes_utc():
    naive = datetime(2026, 1, 1, 12, 0)

    assert coerce_utc(naive) == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def test_coerce_converts_other_offsets():
    plus_two = datetime(2026, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))

    assert coerce_utc(plus_two) == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
    assert coerce_utc(plus_two).tzinfo is UTC


def test_coerce_naive_can_be_refused():
    with pytest.raises(ValueError):
        coerce_utc(datetime(2026, 1, 1), assume_naive_is_utc=False)
