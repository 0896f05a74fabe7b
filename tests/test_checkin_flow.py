"""
Tests for check-in submission and the day detail read-through.
"""

from datetime import date

import pytest

from uplift.exceptions import MalformedResponseError
from uplift.services.checkin import (
    get_day_detail,
    save_morning_checkin,
    submit_nightly_checkin,
)
from uplift.services.reconciliation import ReconciliationPolicy
from uplift.services.severity import Severity
from uplift.services.summary_client import NightlySummaryGenerator

TODAY = date(2024, 3, 10)


class TestMorningCheckin:
    def test_saved_for_today(self, store):
        checkin = save_morning_checkin(store, sleep_quality=2, energy_level=3, today=TODAY)

        assert checkin.date == TODAY
        assert store.get_morning_checkin(TODAY).energy_level == 3

    def test_resave_replaces(self, store):
        first = save_morning_checkin(store, sleep_quality=2, energy_level=3, today=TODAY)
        second = save_morning_checkin(store, sleep_quality=4, energy_level=1, today=TODAY)

        stored = store.get_morning_checkin(TODAY)
        assert second.id == first.id
        assert (stored.sleep_quality, stored.energy_level) == (4, 1)

    @pytest.mark.parametrize("value", [0, 6, "3", None, True])
    def test_rating_out_of_range(self, store, value):
        with pytest.raises(ValueError):
            save_morning_checkin(store, sleep_quality=value, energy_level=3, today=TODAY)


class TestSubmitNightly:
    def test_writes_checkin_and_log_entry(self, store, fake_generator, make_summary):
        generator = fake_generator(make_summary())

        result = submit_nightly_checkin(store, generator, TODAY, "  Busy day  ", TODAY)

        assert generator.calls == [(TODAY, "Busy day")]
        assert result["checkin"].is_backdated is False
        assert result["severity"] == Severity.yellow
        entries = store.get_checkin_entries(TODAY)
        assert len(entries) == 1
        assert entries[0].user_text == "Busy day"
        assert entries[0].summary == make_summary()

    def test_backdated(self, store, fake_generator, make_summary):
        yesterday = date(2024, 3, 9)
        result = submit_nightly_checkin(
            store, fake_generator(make_summary()), yesterday, "Forgot to log", TODAY
        )
        assert result["checkin"].is_backdated is True

    def test_log_is_append_only(self, store, fake_generator, make_summary):
        generator = fake_generator(make_summary(), make_summary())
        submit_nightly_checkin(store, generator, TODAY, "Morning part", TODAY)
        submit_nightly_checkin(store, generator, TODAY, "Evening part", TODAY)

        entries = store.get_checkin_entries(TODAY)
        assert [entry.user_text for entry in entries] == ["Evening part", "Morning part"]
        assert len(store.list_nightly_checkins()) == 1

    def test_merge_is_default(self, store, fake_generator, make_summary):
        generator = fake_generator(
            make_summary(),
            make_summary(activities=[{"name": "Shower"}]),
        )
        submit_nightly_checkin(store, generator, TODAY, "First", TODAY)
        result = submit_nightly_checkin(store, generator, TODAY, "Second", TODAY)

        names = [a.name for a in store.list_activities(result["checkin"].id)]
        assert names == ["Grocery run", "Video call", "Shower"]

    def test_replace_policy(self, store, fake_generator, make_summary):
        generator = fake_generator(
            make_summary(),
            make_summary(activities=[{"name": "Shower"}]),
        )
        submit_nightly_checkin(store, generator, TODAY, "First", TODAY, ReconciliationPolicy.replace)
        result = submit_nightly_checkin(store, generator, TODAY, "Second", TODAY, ReconciliationPolicy.replace)

        names = [a.name for a in store.list_activities(result["checkin"].id)]
        assert names == ["Shower"]

    def test_blank_text_rejected(self, store, fake_generator):
        generator = fake_generator()
        with pytest.raises(ValueError):
            submit_nightly_checkin(store, generator, TODAY, "   ", TODAY)
        assert generator.calls == []

    def test_future_date_rejected(self, store, fake_generator):
        with pytest.raises(ValueError):
            submit_nightly_checkin(store, fake_generator(), date(2024, 3, 11), "text", TODAY)

    def test_malformed_response_writes_nothing(self, store, fake_client):
        generator = NightlySummaryGenerator(api_key="k", client=fake_client(text="Sorry, no."))

        with pytest.raises(MalformedResponseError):
            submit_nightly_checkin(store, generator, TODAY, "text", TODAY)

        assert store.list_nightly_checkins() == []
        assert store.get_checkin_entries(TODAY) == []


class TestDayDetail:
    def test_empty_day(self, store):
        detail = get_day_detail(store, TODAY)

        assert detail["morning"] is None
        assert detail["nightly"] is None
        assert detail["activities"] == []
        assert detail["entries"] == []
        assert detail["severity"] == Severity.none

    def test_full_day(self, store, fake_generator, make_summary):
        save_morning_checkin(store, sleep_quality=3, energy_level=2, today=TODAY)
        submit_nightly_checkin(store, fake_generator(make_summary()), TODAY, "Busy day", TODAY)

        detail = get_day_detail(store, TODAY)

        assert detail["morning"].sleep_quality == 3
        assert detail["nightly"].energy_assessment == "slight_deficit"
        assert [a.name for a in detail["activities"]] == ["Grocery run", "Video call"]
        assert detail["activities"][0].primary_effort_category == "physical"
        assert len(detail["entries"]) == 1
        assert detail["severity"] == Severity.yellow
