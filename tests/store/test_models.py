import pytest

from screener.core import steps
from screener.store.models import Session


def test_record_answer_accepts_canonical_values():
    s = Session(chatId=1, applicantToken="tok-1")
    s.record_answer("team_role", "yes")
    s.record_answer("weekly_availability", "full_time")
    assert s.answers == {"team_role": "yes", "weekly_availability": "full_time"}


def test_record_answer_rejects_overwrite():
    s = Session(chatId=1, applicantToken="tok-1")
    s.record_answer("team_role", "yes")
    with pytest.raises(ValueError):
        s.record_answer("team_role", "no")
    assert s.answers["team_role"] == "yes"


@pytest.mark.parametrize("key,value", [
    ("team_role", "maybe"),
    ("team_role", "y"),          # trigger code, not canonical value
    ("weekly_availability", 30),
    ("unknown_key", "yes"),
])
def test_record_answer_rejects_invalid(key, value):
    s = Session(chatId=1, applicantToken="tok-1")
    with pytest.raises(ValueError):
        s.record_answer(key, value)
    assert s.answers == {}


def test_extended_only_keys_need_extended_variant():
    std = Session(chatId=1, applicantToken="tok-1", variant="standard")
    with pytest.raises(ValueError):
        std.record_answer("age", 30)

    ext = Session(chatId=1, applicantToken="tok-1", variant="extended")
    ext.record_answer("age", 30)
    assert ext.answers["age"] == 30


@pytest.mark.parametrize("value", [9, 81, "30", True])
def test_age_must_be_in_range_int(value):
    s = Session(chatId=1, applicantToken="tok-1", variant="extended")
    with pytest.raises(ValueError):
        s.record_answer("age", value)


def test_completed_flag():
    s = Session(chatId=1, applicantToken="tok-1")
    assert s.completed is False
    s.step = steps.COMPLETED
    assert s.completed is True
