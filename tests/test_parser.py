"""
Tests for field-level parsing of schedule export rows.
"""

import pytest

from nuschedule.models.schema import DayOfWeek, SectionType
from nuschedule.pipelines.seed.parser import (
    classify_section_type,
    convert_to_24_hour,
    make_professor_email,
    parse_course_code,
    parse_credits,
    parse_days,
    parse_faculty,
    parse_room,
    parse_row,
    parse_time_range,
)


def make_row(**overrides):
    fields = {
        "school": "SEDS",
        "level": "UG",
        "abbr": "CSCI 151",
        "st": "1L",
        "title": "Programming for Scientists",
        "cr_us": "4",
        "cr_ects": "8",
        "start_date": "01/12/2026",
        "end_date": "04/24/2026",
        "days": "MW",
        "time": "09:00 AM-10:15 AM",
        "enr": "118",
        "cap": "120",
        "faculty": "Askar Boranbayev",
        "room": "(C3) 1009 - cap:120",
    }
    fields.update(overrides)
    return list(fields.values())


class TestSectionType:
    @pytest.mark.parametrize(
        "code,expected",
        [
            ("1L", SectionType.LECTURE),
            ("2B", SectionType.LAB),
            ("3S", SectionType.SEMINAR),
            ("1R", SectionType.RECITATION),
            ("1l", SectionType.LECTURE),
            ("1I", SectionType.LECTURE),
            ("", SectionType.LECTURE),
        ],
    )
    def test_trailing_letter(self, code, expected):
        assert classify_section_type(code) == expected

    def test_only_last_character_counts(self):
        # "seminar" ends in "r" which is a recitation code, not a seminar
        assert classify_section_type("seminar") == SectionType.RECITATION
        assert classify_section_type("lecture") == SectionType.LECTURE


class TestTimes:
    def test_convert_afternoon(self):
        assert convert_to_24_hour("02:00 PM") == "14:00:00"

    def test_convert_noon_and_midnight(self):
        assert convert_to_24_hour("12:30 PM") == "12:30:00"
        assert convert_to_24_hour("12:00 AM") == "00:00:00"

    def test_convert_rejects_garbage(self):
        assert convert_to_24_hour("") == ""
        assert convert_to_24_hour("14:00") == ""
        assert convert_to_24_hour("noon") == ""

    def test_time_range(self):
        assert parse_time_range("02:00 PM-03:15 PM") == ("14:00:00", "15:15:00")

    def test_time_range_online(self):
        assert parse_time_range("Online/Distant") == ("", "")

    def test_time_range_half_broken(self):
        assert parse_time_range("02:00 PM-later") == ("", "")
        assert parse_time_range("02:00 PM") == ("", "")


class TestDays:
    def test_all_letters(self):
        assert parse_days("MTWRFS") == [
            DayOfWeek.MONDAY,
            DayOfWeek.TUESDAY,
            DayOfWeek.WEDNESDAY,
            DayOfWeek.THURSDAY,
            DayOfWeek.FRIDAY,
            DayOfWeek.SATURDAY,
        ]

    def test_unknown_letters_dropped(self):
        assert parse_days("MX") == [DayOfWeek.MONDAY]

    def test_duplicates_collapse(self):
        assert parse_days("MWM") == [DayOfWeek.MONDAY, DayOfWeek.WEDNESDAY]

    def test_empty(self):
        assert parse_days("") == []


class TestRoom:
    def test_building_in_parens(self):
        assert parse_room("(C3) 1009 - cap:70") == ("C3", "1009")

    def test_named_building(self):
        assert parse_room("Green Hall - cap:231") == ("Green Hall", None)

    def test_parens_without_room(self):
        assert parse_room("(C3) - cap:70") == ("C3", None)

    def test_empty(self):
        assert parse_room("") == (None, None)
        assert parse_room("   ") == (None, None)


class TestFaculty:
    def test_two_word_name(self):
        professor = parse_faculty("Askar Boranbayev", "nu.edu.kz")
        assert professor.first_name == "Askar"
        assert professor.last_name == "Boranbayev"
        assert professor.email == "askar.boranbayev@nu.edu.kz"

    def test_multi_word_surname(self):
        professor = parse_faculty("Hans de Nivelle", "nu.edu.kz")
        assert professor.last_name == "de Nivelle"
        assert professor.email == "hans.denivelle@nu.edu.kz"

    def test_first_listed_only(self):
        professor = parse_faculty("Yerlan Amanbek, Askar Boranbayev", "nu.edu.kz")
        assert professor.name == "Yerlan Amanbek"

    def test_no_professor(self):
        assert parse_faculty("", "nu.edu.kz") is None
        assert parse_faculty("Online/Distant", "nu.edu.kz") is None
        assert parse_faculty("Zhanna", "nu.edu.kz") is None

    def test_email_domain(self):
        assert make_professor_email("Aida", "Sultan", "example.edu") == "aida.sultan@example.edu"


class TestRow:
    def test_full_row(self):
        record = parse_row(make_row())

        assert record.course_code == "CSCI 151"
        assert record.section_number == "1L"
        assert record.section_type == SectionType.LECTURE
        assert record.credits == 8.0
        assert record.days == [DayOfWeek.MONDAY, DayOfWeek.WEDNESDAY]
        assert record.start_time == "09:00:00"
        assert record.end_time == "10:15:00"
        assert record.capacity == 120
        assert record.professor.email == "askar.boranbayev@nu.edu.kz"
        assert record.building == "C3"
        assert record.room == "1009"
        assert record.has_time_window

    def test_cross_listed_code(self):
        record = parse_row(make_row(abbr="CSCI 235/MATH 235"))
        assert record.course_code == "CSCI 235"
        assert parse_course_code(" PHIL 210 / HST 210 ") == "PHIL 210"

    def test_online_row(self):
        record = parse_row(
            make_row(days="", time="Online/Distant", faculty="Online/Distant", room="Online/Distant")
        )
        assert record is not None
        assert not record.has_time_window
        assert record.professor is None
        assert record.building == "Online/Distant"

    def test_unparseable_numbers(self):
        record = parse_row(make_row(cr_ects="n/a", cap=""))
        assert record.credits == 0.0
        assert record.capacity == 0

    def test_credits(self):
        assert parse_credits("7.5") == 7.5
        assert parse_credits("nan") == 0.0
        assert parse_credits("") == 0.0

    def test_short_row_skipped(self):
        assert parse_row(make_row()[:14]) is None

    def test_blank_course_skipped(self):
        assert parse_row(make_row(abbr="  ")) is None
        assert parse_row(make_row(abbr="/MATH 235")) is None

    def test_email_domain_passed_through(self):
        record = parse_row(make_row(), email_domain="example.edu")
        assert record.professor.email == "askar.boranbayev@example.edu"
