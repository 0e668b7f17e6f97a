"""Tests for CalendarFields ⇄ Instant normalization."""

from collections.abc import Callable

import pytest

from tdcalc.domain.errors import NormalizationError, NormalizationReason
from tdcalc.domain.normalizer import format_offset, normalize, to_calendar_fields
from tdcalc.domain.parser import parse_timestamp
from tdcalc.domain.types import CalendarFields, Instant


class TestNormalize:
    def test_epoch(self) -> None:
        assert normalize(CalendarFields(1970, 1, 1)) == Instant(0)

    def test_known_timestamp(self) -> None:
        assert normalize(CalendarFields(2024, 1, 1)).seconds == 1_704_067_200
        assert normalize(CalendarFields(2024, 1, 2, 3, 4, 5)).seconds == 1_704_067_200 + 97_445

    def test_before_epoch_keeps_nanos_positive(self) -> None:
        instant = normalize(CalendarFields(1969, 12, 31, 23, 59, 59, 500_000_000))
        assert instant == Instant(-1, 500_000_000)

    def test_missing_offset_is_utc(self) -> None:
        instant = normalize(CalendarFields(2024, 3, 10, 7, 30))
        assert instant == normalize(CalendarFields(2024, 3, 10, 7, 30, offset_minutes=0))
        assert instant.offset_minutes is None

    def test_offset_is_applied(self, at: Callable[[str], Instant]) -> None:
        assert at("2024-03-10T02:30:00-05:00") == at("2024-03-10T07:30:00Z")
        assert at("2024-03-10T12:00:00+05:30") == at("2024-03-10T06:30:00")

    def test_offset_is_kept_for_display(self, at: Callable[[str], Instant]) -> None:
        assert at("2024-03-10T02:30:00-05:00").offset_minutes == -300

    @pytest.mark.parametrize("date", [(2024, 2, 29), (2000, 2, 29), (1600, 2, 29), (2023, 2, 28), (2023, 12, 31)])
    def test_valid_dates(self, date: tuple[int, int, int]) -> None:
        normalize(CalendarFields(*date))

    @pytest.mark.parametrize("date", [(2023, 2, 29), (1900, 2, 29), (2024, 2, 30), (2024, 4, 31), (2024, 11, 31)])
    def test_impossible_dates(self, date: tuple[int, int, int]) -> None:
        with pytest.raises(NormalizationError) as exc_info:
            normalize(CalendarFields(*date), text="input")
        assert exc_info.value.reason == NormalizationReason.INVALID_CALENDAR_DATE
        assert exc_info.value.text == "input"

    def test_leap_day_fragment(self) -> None:
        with pytest.raises(NormalizationError) as exc_info:
            normalize(parse_timestamp("2023-02-29T10:00"), text="2023-02-29T10:00")
        assert exc_info.value.fragment == "2023-02-29"

    @pytest.mark.parametrize("offset", [24 * 60, -24 * 60])
    def test_offset_at_limit(self, offset: int) -> None:
        normalize(CalendarFields(2024, 1, 1, offset_minutes=offset))

    @pytest.mark.parametrize(("offset", "fragment"), [(24 * 60 + 1, "+24:01"), (-25 * 60, "-25:00")])
    def test_offset_beyond_limit(self, offset: int, fragment: str) -> None:
        with pytest.raises(NormalizationError) as exc_info:
            normalize(CalendarFields(2024, 1, 1, offset_minutes=offset))
        assert exc_info.value.reason == NormalizationReason.INVALID_OFFSET
        assert exc_info.value.fragment == fragment

    def test_parsed_offset_beyond_limit(self) -> None:
        with pytest.raises(NormalizationError) as exc_info:
            normalize(parse_timestamp("2024-01-01T00:00+25:00"))
        assert exc_info.value.reason == NormalizationReason.INVALID_OFFSET


class TestRoundTrip:
    @pytest.mark.parametrize(
        "fields",
        [
            CalendarFields(1970, 1, 1),
            CalendarFields(2024, 2, 29, 23, 59, 59),
            CalendarFields(2024, 1, 2, 3, 4, 5, 123_456_789),
            CalendarFields(1969, 12, 31, 12, 0, 1, 5),
            CalendarFields(0, 1, 1),
            CalendarFields(9999, 12, 31, 23, 59, 59, 999_999_999),
            CalendarFields(2024, 3, 10, 2, 30, 0, offset_minutes=-300),
            CalendarFields(2000, 1, 1, 0, 0, 0, offset_minutes=24 * 60),
            CalendarFields(1900, 3, 1, 6, 7, 8, offset_minutes=345),
        ],
    )
    def test_calendar_fields_survive(self, fields: CalendarFields) -> None:
        assert to_calendar_fields(normalize(fields)) == fields

    def test_every_day_of_a_leap_year(self) -> None:
        instant = normalize(CalendarFields(2024, 1, 1))
        seen = set()
        for day in range(366):
            fields = to_calendar_fields(Instant(instant.seconds + day * 86_400))
            assert normalize(fields) == Instant(instant.seconds + day * 86_400)
            seen.add((fields.month, fields.day))
        assert (2, 29) in seen
        assert len(seen) == 366


class TestFormatOffset:
    @pytest.mark.parametrize(("minutes", "text"), [(0, "+00:00"), (-300, "-05:00"), (330, "+05:30"), (-45, "-00:45")])
    def test_format(self, minutes: int, text: str) -> None:
        assert format_offset(minutes) == text
