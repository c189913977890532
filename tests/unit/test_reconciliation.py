"""Unit tests for pricing period reconciliation.

Test categories:
- One existing period per overlap shape (none, covered, split, head, tail)
- Applying a plan to a snapshot
- Input validation (inverted range, overlapping existing periods)
- Calendar lookups (period for a date, effective price, per-day prices)
- Randomized non-overlap and coverage check
"""

import datetime as dt
import itertools
import random

import pytest
from pydantic import ValidationError

from rental_pricing.models import ErrorCode, PricingError, PricingPeriod, ReconcilePlan
from rental_pricing.services.reconciliation import (
    apply_reconcile_plan,
    find_overlapping_periods,
    get_calendar_prices,
    get_effective_price_for_date,
    get_period_for_date,
    reconcile_pricing_periods,
    validate_reconcile_input,
)


def jan(day: int) -> dt.date:
    return dt.date(2025, 1, day)


def period(start: dt.date, end: dt.date, period_id: str | None = None, price: int = 15000) -> PricingPeriod:
    return PricingPeriod(id=period_id, start_date=start, end_date=end, price=price)


@pytest.fixture
def festival() -> PricingPeriod:
    """New period January 10-20."""
    return PricingPeriod(start_date=jan(10), end_date=jan(20), price=15000, label="Festival")


class TestReconcileShapes:
    """Tests for each way an existing period can meet the new one."""

    def test_no_existing_periods(self, festival: PricingPeriod) -> None:
        plan = reconcile_pricing_periods(festival, [])
        assert plan == ReconcilePlan(to_add=[festival])

    def test_no_overlap(self, festival: PricingPeriod) -> None:
        before = period(jan(1), jan(9), "before")
        after = period(jan(21), jan(31), "after")

        plan = reconcile_pricing_periods(festival, [before, after])

        assert plan.to_add == [festival]
        assert plan.to_update == []
        assert plan.to_delete == []

    def test_covered_period_deleted(self, festival: PricingPeriod) -> None:
        inside = period(jan(12), jan(15), "inside")
        plan = reconcile_pricing_periods(festival, [inside])
        assert plan.to_delete == ["inside"]
        assert plan.to_update == []

    def test_identical_range_deleted(self, festival: PricingPeriod) -> None:
        same = period(jan(10), jan(20), "same")
        plan = reconcile_pricing_periods(festival, [same])
        assert plan.to_delete == ["same"]

    def test_containing_period_split(
        self, festival: PricingPeriod, january_period: PricingPeriod
    ) -> None:
        """January 1-31 becomes head 1-9 (new, no id) and tail 21-31 (updated)."""
        plan = reconcile_pricing_periods(festival, [january_period])

        assert plan.to_add[0] == festival
        head = plan.to_add[1]
        assert head.id is None
        assert (head.start_date, head.end_date) == (jan(1), jan(9))
        assert head.price == 9000
        assert head.label == "January"

        tail = plan.to_update[0]
        assert tail.id == "period-jan"
        assert (tail.start_date, tail.end_date) == (jan(21), jan(31))
        assert plan.to_delete == []

    def test_single_day_new_period_splits(self, january_period: PricingPeriod) -> None:
        new = period(jan(15), jan(15))
        plan = reconcile_pricing_periods(new, [january_period])

        assert (plan.to_add[1].start_date, plan.to_add[1].end_date) == (jan(1), jan(14))
        assert (plan.to_update[0].start_date, plan.to_update[0].end_date) == (jan(16), jan(31))

    def test_head_overlap_moves_start(self, festival: PricingPeriod) -> None:
        existing = period(jan(15), jan(25), "late")
        plan = reconcile_pricing_periods(festival, [existing])

        assert plan.to_update[0].id == "late"
        assert (plan.to_update[0].start_date, plan.to_update[0].end_date) == (jan(21), jan(25))

    def test_tail_overlap_moves_end(self, festival: PricingPeriod) -> None:
        existing = period(jan(5), jan(12), "early")
        plan = reconcile_pricing_periods(festival, [existing])

        assert plan.to_update[0].id == "early"
        assert (plan.to_update[0].start_date, plan.to_update[0].end_date) == (jan(5), jan(9))

    def test_shared_start_date_trims_head(self, festival: PricingPeriod) -> None:
        existing = period(jan(10), jan(25), "same-start")
        plan = reconcile_pricing_periods(festival, [existing])
        assert (plan.to_update[0].start_date, plan.to_update[0].end_date) == (jan(21), jan(25))

    def test_shared_end_date_trims_tail(self, festival: PricingPeriod) -> None:
        existing = period(jan(1), jan(20), "same-end")
        plan = reconcile_pricing_periods(festival, [existing])
        assert (plan.to_update[0].start_date, plan.to_update[0].end_date) == (jan(1), jan(9))

    def test_new_period_always_first(self, festival: PricingPeriod) -> None:
        existing = [period(jan(1), jan(12), "a"), period(jan(13), jan(14), "b"), period(jan(18), jan(31), "c")]
        plan = reconcile_pricing_periods(festival, existing)

        assert plan.to_add == [festival]
        assert plan.to_delete == ["b"]
        assert [p.id for p in plan.to_update] == ["a", "c"]

    def test_inputs_not_modified(self, festival: PricingPeriod, january_period: PricingPeriod) -> None:
        reconcile_pricing_periods(festival, [january_period])
        assert (january_period.start_date, january_period.end_date) == (jan(1), jan(31))


class TestApplyReconcilePlan:
    """Tests for applying a plan to an in-memory snapshot."""

    def test_split_snapshot(self, festival: PricingPeriod, january_period: PricingPeriod) -> None:
        ids = iter(["new-1", "new-2"])
        plan = reconcile_pricing_periods(festival, [january_period])

        result = apply_reconcile_plan([january_period], plan, id_factory=lambda: next(ids))

        assert [(p.id, p.start_date, p.end_date) for p in result] == [
            ("new-2", jan(1), jan(9)),
            ("new-1", jan(10), jan(20)),
            ("period-jan", jan(21), jan(31)),
        ]

    def test_deleted_periods_removed(self, festival: PricingPeriod) -> None:
        inside = period(jan(12), jan(15), "inside")
        plan = reconcile_pricing_periods(festival, [inside])

        result = apply_reconcile_plan([inside], plan, id_factory=lambda: "new")

        assert [p.id for p in result] == ["new"]

    def test_unsaved_snapshot_period_rejected(self, festival: PricingPeriod) -> None:
        """Periods without an id cannot be told apart, so none may be dropped."""
        unsaved = [
            period(dt.date(2025, 2, 1), dt.date(2025, 2, 5)),
            period(dt.date(2025, 3, 1), dt.date(2025, 3, 5)),
        ]
        plan = reconcile_pricing_periods(festival, [])

        with pytest.raises(PricingError) as exc_info:
            apply_reconcile_plan(unsaved, plan, id_factory=lambda: "new")

        assert exc_info.value.code == ErrorCode.PERIOD_ID_MISSING
        assert exc_info.value.details == {"index": "0", "start_date": "2025-02-01"}

    def test_default_ids_generated(self, festival: PricingPeriod) -> None:
        result = apply_reconcile_plan([], reconcile_pricing_periods(festival, []))
        assert result[0].id is not None


class TestValidateReconcileInput:
    """Tests for reconciler preconditions."""

    def test_valid_input(self, festival: PricingPeriod, january_period: PricingPeriod) -> None:
        validate_reconcile_input(festival, [january_period])

    def test_inverted_range(self) -> None:
        with pytest.raises(PricingError) as exc_info:
            validate_reconcile_input(period(jan(20), jan(10)), [])
        assert exc_info.value.code == ErrorCode.INVALID_PERIOD_RANGE

    def test_overlapping_existing(self, festival: PricingPeriod) -> None:
        existing = [period(jan(1), jan(5), "a"), period(jan(5), jan(8), "b")]

        with pytest.raises(PricingError) as exc_info:
            validate_reconcile_input(festival, existing)

        assert exc_info.value.code == ErrorCode.OVERLAPPING_PERIODS
        assert exc_info.value.details == {"first": "a", "second": "b"}

    def test_unsaved_existing_period(self, festival: PricingPeriod) -> None:
        existing = [period(jan(1), jan(5), "a"), period(jan(25), jan(31))]

        with pytest.raises(PricingError) as exc_info:
            validate_reconcile_input(festival, existing)

        assert exc_info.value.code == ErrorCode.PERIOD_ID_MISSING
        assert exc_info.value.details == {"index": "1", "start_date": "2025-01-25"}

    def test_find_overlapping_periods(self) -> None:
        a = period(jan(1), jan(10), "a")
        b = period(jan(5), jan(6), "b")
        c = period(jan(8), jan(12), "c")
        d = period(jan(13), jan(14), "d")

        pairs = find_overlapping_periods([d, c, b, a])

        assert [(x.id, y.id) for x, y in pairs] == [("a", "b"), ("a", "c")]


class TestPricingPeriodModel:
    """Tests for PricingPeriod."""

    def test_requires_price_source(self) -> None:
        with pytest.raises(ValidationError):
            PricingPeriod(start_date=jan(1), end_date=jan(2))

    def test_effective_price_absolute(self) -> None:
        assert period(jan(1), jan(2), price=12000).effective_price(10000) == 12000

    def test_effective_price_percentage(self) -> None:
        discounted = PricingPeriod(start_date=jan(1), end_date=jan(2), percentage_adjustment=-10)
        assert discounted.effective_price(10000) == 9000

    def test_overlaps_and_contains(self, january_period: PricingPeriod) -> None:
        assert january_period.overlaps(period(jan(31), dt.date(2025, 2, 3)))
        assert not january_period.overlaps(period(dt.date(2025, 2, 1), dt.date(2025, 2, 3)))
        assert january_period.contains(jan(31))
        assert not january_period.contains(dt.date(2024, 12, 31))

class TestCalendarLookups:
    """Tests for resolving days against saved periods."""

    @pytest.fixture
    def saved_periods(self) -> list[PricingPeriod]:
        return [
            PricingPeriod(id="peak", start_date=jan(1), end_date=jan(5), price=15000, label="Peak"),
            PricingPeriod(id="promo", start_date=jan(8), end_date=jan(9), percentage_adjustment=-10),
        ]

    def test_period_for_date(self, saved_periods: list[PricingPeriod]) -> None:
        assert get_period_for_date(jan(1), saved_periods).id == "peak"
        assert get_period_for_date(jan(5), saved_periods).id == "peak"
        assert get_period_for_date(jan(9), saved_periods).id == "promo"

    def test_no_period_for_date(self, saved_periods: list[PricingPeriod]) -> None:
        assert get_period_for_date(jan(6), saved_periods) is None
        assert get_period_for_date(jan(6), []) is None

    def test_first_matching_period_wins(self) -> None:
        first = period(jan(1), jan(10), "first", price=12000)
        second = period(jan(5), jan(15), "second", price=13000)
        assert get_period_for_date(jan(7), [first, second]) is first

    def test_effective_price(self, saved_periods: list[PricingPeriod]) -> None:
        assert get_effective_price_for_date(jan(3), saved_periods, 10000) == 15000
        assert get_effective_price_for_date(jan(8), saved_periods, 10000) == 9000
        assert get_effective_price_for_date(jan(6), saved_periods, 10000) == 10000

    def test_calendar_prices(self, saved_periods: list[PricingPeriod]) -> None:
        days = get_calendar_prices(jan(4), jan(9), saved_periods, 10000)

        assert [day.date for day in days] == [jan(d) for d in range(4, 10)]
        assert [day.price for day in days] == [15000, 15000, 10000, 10000, 9000, 9000]
        assert [day.multiplier for day in days] == [150, 150, 100, 100, 90, 90]
        assert [day.period_id for day in days] == ["peak", "peak", None, None, "promo", "promo"]
        assert days[0].label == "Peak"

    def test_calendar_prices_zero_base_price(self, saved_periods: list[PricingPeriod]) -> None:
        """A zero base price reports a neutral multiplier."""
        days = get_calendar_prices(jan(1), jan(1), saved_periods, 0)
        assert (days[0].price, days[0].multiplier) == (15000, 100)

    def test_calendar_prices_inverted_range(self, saved_periods: list[PricingPeriod]) -> None:
        assert get_calendar_prices(jan(9), jan(4), saved_periods, 10000) == []



def _random_calendar(rng: random.Random, origin: dt.date) -> list[PricingPeriod]:
    periods: list[PricingPeriod] = []
    cursor = origin + dt.timedelta(days=rng.randint(0, 5))
    for index in range(rng.randint(0, 8)):
        length = rng.randint(1, 15)
        end = cursor + dt.timedelta(days=length - 1)
        periods.append(period(cursor, end, f"p{index}", price=rng.randint(5000, 30000)))
        cursor = end + dt.timedelta(days=rng.randint(1, 6))
    return periods


def _days(start: dt.date, end: dt.date):
    day = start
    while day <= end:
        yield day
        day += dt.timedelta(days=1)


class TestReconcileProperties:
    """Randomized checks over many calendars."""

    def test_no_overlaps_and_coverage_preserved(self) -> None:
        rng = random.Random(1234)
        origin = dt.date(2025, 1, 1)
        counter = itertools.count()

        for _ in range(300):
            existing = _random_calendar(rng, origin)
            new_start = origin + dt.timedelta(days=rng.randint(0, 120))
            new_end = new_start + dt.timedelta(days=rng.randint(0, 30))
            new = PricingPeriod(start_date=new_start, end_date=new_end, price=99999, label="new")

            plan = reconcile_pricing_periods(new, existing)
            result = apply_reconcile_plan(existing, plan, id_factory=lambda: f"gen-{next(counter)}")

            assert find_overlapping_periods(result) == []
            assert sum(1 for p in result if p.label == "new") == 1

            for day in _days(new_start, new_end):
                covering = [p for p in result if p.contains(day)]
                assert len(covering) == 1
                assert covering[0].price == 99999

            for old in existing:
                for day in _days(old.start_date, old.end_date):
                    if new_start <= day <= new_end:
                        continue
                    covering = [p for p in result if p.contains(day)]
                    assert len(covering) == 1
                    assert covering[0].price == old.price
