"""Tests for the shared workflow layer."""

from datetime import datetime

import pytest

from muistutin.config import DATA_DIR, Config
from muistutin.core.repeat import Everyday, NoRepeat, Weekends
from muistutin.workflows import (
    format_status_line,
    get_store,
    load_household,
    render_view,
    status_to_dict,
)


@pytest.fixture
def config(tmp_path):
    return Config(data_dir=str(tmp_path))


class TestGetStore:
    def test_uses_configured_dir(self, tmp_path):
        assert get_store(Config(data_dir=str(tmp_path))).data_dir == tmp_path

    def test_falls_back_to_default(self, monkeypatch):
        monkeypatch.setattr("muistutin.workflows.JsonFileStore", lambda d: type("S", (), {"data_dir": d})())
        assert get_store(Config()).data_dir == DATA_DIR


class TestLoadHousehold:
    def test_explicit_now_wins(self, config):
        config.clock_override = datetime(2024, 1, 1, 8, 0)
        h = load_household(config, datetime(2024, 1, 9, 8, 0))
        assert h.clock.now() == datetime(2024, 1, 9, 8, 0)

    def test_config_override(self, config):
        config.clock_override = datetime(2024, 1, 1, 8, 0)
        assert load_household(config).clock.now() == datetime(2024, 1, 1, 8, 0)

    def test_state_survives_reload(self, config):
        h = load_household(config, datetime(2024, 1, 9, 8, 0))
        h.add_member("Anna")
        h.add_reminder("Daily", "Anna", Everyday(), "07:30")
        h.toggle_done(0)
        again = load_household(config, datetime(2024, 1, 9, 8, 5))
        assert again.members == ["Anna"]
        assert again.statuses("today")[0][1].done_today is True


class TestRendering:
    @pytest.fixture
    def household(self, config):
        h = load_household(config, datetime(2024, 1, 9, 8, 0))
        h.add_member("Anna")
        h.add_reminder("Take medicine", "Anna", Everyday(), "07:30")
        h.add_reminder("Feed the cat", "Anna", Weekends(), "09:00")
        return h

    def test_status_line_late(self, household):
        index, status = household.statuses("today")[0]
        line = format_status_line(index + 1, status)
        assert line == " 1. [ ] Take medicine | Assigned to: Anna | Deadline: 07:30 (30 min ago) | LATE"

    def test_status_line_done_hides_countdown(self, household):
        household.toggle_done(0)
        index, status = household.statuses("today")[0]
        assert format_status_line(index + 1, status) == " 1. [x] Take medicine | Assigned to: Anna | Deadline: 07:30"

    def test_render_today(self, household):
        text = render_view(household, "today")
        assert "(Mocked time)" in text
        assert "Take medicine" in text
        assert "Feed the cat" not in text
        assert "Repeats every day" in text

    def test_render_all_keeps_numbers(self, household):
        text = render_view(household, "all")
        assert " 2. [ ] Feed the cat" in text

    def test_render_empty(self, config):
        h = load_household(config, datetime(2024, 1, 9, 8, 0))
        assert "No reminders for today." in render_view(h, "today")

    def test_status_to_dict(self, household):
        household.add_reminder("Sign form", "Anna", NoRepeat(), "")
        index, status = household.statuses("all")[2]
        data = status_to_dict(index + 1, status)
        assert data["number"] == 3
        assert data["dueToday"] is True
        assert data["late"] is False
        assert data["timeToDeadline"] == ""
        assert data["repeat"] == {"type": "none"}
