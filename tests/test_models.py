from datetime import time

import pytest

from timetable.models import (
    InvalidScheduleError,
    RecurringSchedule,
    StudentIdentifier,
    Weekday,
    WeeklySlot,
    parse_time,
)


def test_weekday_parse_is_case_insensitive():
    assert Weekday.parse("Monday") is Weekday.MONDAY
    assert Weekday.parse(" friday ") is Weekday.FRIDAY
    assert Weekday.WEDNESDAY.label == "Wednesday"


@pytest.mark.parametrize("name", ["Saturday", "Sunday", "Mon", ""])
def test_weekday_parse_rejects_weekend_and_unknown(name):
    with pytest.raises(InvalidScheduleError):
        Weekday.parse(name)


def test_parse_time_accepts_form_input():
    assert parse_time("09:00") == time(9, 0)
    assert parse_time("9:30") == time(9, 30)
    assert parse_time("23:59") == time(23, 59)


@pytest.mark.parametrize("value", ["24:00", "09:60", "9", "nine", "", "09:00:00"])
def test_parse_time_rejects_out_of_range(value):
    with pytest.raises(InvalidScheduleError):
        parse_time(value)


def test_slot_from_dict_round_trips_stored_entry():
    entry = {"day": "Tuesday", "startTime": "08:00", "endTime": "10:30"}
    slot = WeeklySlot.from_dict(entry)

    assert slot == WeeklySlot(Weekday.TUESDAY, time(8, 0), time(10, 30))
    assert slot.to_dict() == entry


def test_slot_requires_end_after_start():
    with pytest.raises(InvalidScheduleError):
        WeeklySlot.from_dict({"day": "Monday", "startTime": "11:00", "endTime": "11:00"})


def test_invalid_schedule_error_is_value_error():
    assert issubclass(InvalidScheduleError, ValueError)


def test_schedule_from_document_orders_slots_by_weekday():
    schedule = RecurringSchedule.from_document("lec1", {
        "courseName": "Data Structures",
        "location": "Room 101",
        "lecturerId": "u1",
        "schedule": [
            {"day": "Friday", "startTime": "14:00", "endTime": "16:00"},
            {"day": "Monday", "startTime": "09:00", "endTime": "11:00"},
            {"day": "Wednesday", "startTime": "09:00", "endTime": "10:00"},
        ],
    })

    assert schedule.id == "lec1"
    assert schedule.label == "Data Structures"
    assert schedule.location == "Room 101"
    assert schedule.lecturer_id == "u1"
    assert [slot.day for slot in schedule.slots] == [
        Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY
    ]


def test_schedule_from_document_without_slots():
    schedule = RecurringSchedule.from_document("lec2", {"courseName": "Seminar"})
    assert schedule.slots == []
    assert schedule.location == ""


def test_schedule_from_document_rejects_malformed_slot_with_doc_id():
    with pytest.raises(InvalidScheduleError, match="lec3"):
        RecurringSchedule.from_document("lec3", {
            "courseName": "Physics",
            "schedule": [
                {"day": "Monday", "startTime": "09:00", "endTime": "11:00"},
                {"day": "Saturday", "startTime": "09:00", "endTime": "11:00"},
            ],
        })


def test_student_identifier_parse():
    identifier = StudentIdentifier.parse("PS/ITC/21/0001")

    assert identifier == StudentIdentifier("PS", "ITC", "21", "0001")
    assert identifier.enrollment_year == 2021
    assert str(identifier) == "PS/ITC/21/0001"


def test_student_identifier_without_serial():
    identifier = StudentIdentifier.parse("PS/ITC/24")
    assert identifier is not None
    assert identifier.serial == ""
    assert str(identifier) == "PS/ITC/24"


@pytest.mark.parametrize("text", [None, 42, "", "garbage", "A/B", "PS/ITC/2A/0001", "PS/ITC/210/1", "PS/ITC/ 1/1", "PS/ITC/21\n", "PS/ITC/21\n/0001"])
def test_student_identifier_parse_rejects_malformed(text):
    assert StudentIdentifier.parse(text) is None
