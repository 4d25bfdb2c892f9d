# tests/test_csv_codec.py

import pytest

import config
from core.csv_codec import EmptyInputError, parse_csv, serialize_csv, tokenize_line
from core.grades import UNCLASSIFIED_GRADE

HEADER_LINE = ",".join(config.CSV_HEADERS)


def make_csv(*rows: str) -> str:
    return "\n".join([HEADER_LINE, *rows])


# === tokenizer ===


def test_tokenize_plain_line():
    assert tokenize_line("a, b ,c") == ["a", "b", "c"]


def test_tokenize_keeps_commas_inside_quotes():
    assert tokenize_line('a,"b, c",d') == ["a", "b, c", "d"]


def test_tokenize_escaped_quote_does_not_toggle():
    assert tokenize_line('a,b\\",c') == ["a", 'b\\"', "c"]


def test_tokenize_trailing_empty_field():
    assert tokenize_line("a,") == ["a", ""]


# === parse ===


def test_parse_maps_columns(sample_csv):
    students = parse_csv(sample_csv)

    assert len(students) == 3

    first = students[0]
    assert first.timestamp == "t1"
    assert first.full_name == "أحمد محمد"
    assert first.student_id == "401"
    assert first.gender == "ذكر"
    assert first.grade == "الاول"
    assert first.mobile == "0599123456"
    assert first.has_siblings == "نعم"
    assert first.nearest_landmark == "مسجد النور"
    assert first.attendance_records == {}


def test_parse_normalizes_grades(sample_csv):
    students = parse_csv(sample_csv)

    assert students[2].grade == "السابع"


def test_parse_assigns_unique_ids(sample_csv):
    students = parse_csv(sample_csv)

    assert len({s.id for s in students}) == len(students)


def test_parse_quoted_landmark_with_comma_is_not_split():
    students = parse_csv(make_csv('t,أحمد,1,ذكر,الاول,059,لا,"مسجد النور, الشارع الرئيسي"'))

    assert students[0].nearest_landmark == "مسجد النور, الشارع الرئيسي"


def test_parse_unquoted_landmark_overflow_is_rejoined():
    students = parse_csv(make_csv("t,أحمد,1,ذكر,الاول,059,لا,مسجد النور,الشارع الرئيسي"))

    assert students[0].nearest_landmark == "مسجد النور, الشارع الرئيسي"


def test_parse_repairs_cyrillic_siblings_flag():
    students = parse_csv(make_csv("t,أحمد,1,ذكر,الاول,059,нعم,مسجد"))

    assert students[0].has_siblings == "نعم"


def test_parse_drops_rows_without_full_name():
    students = parse_csv(
        make_csv(
            "t1,أحمد,1,ذكر,الاول,059,لا,مسجد",
            "t2,,2,ذكر,الاول,059,لا,مسجد",
            "",
        )
    )

    assert [s.full_name for s in students] == ["أحمد"]


def test_parse_ignores_unknown_headers():
    text = "\n".join(
        [
            f"{config.HEADER_FULL_NAME},ملاحظات,{config.HEADER_GRADE}",
            "أحمد,note,الثاني",
        ]
    )

    students = parse_csv(text)

    assert students[0].full_name == "أحمد"
    assert students[0].grade == "الثاني"
    assert students[0].mobile == ""


def test_parse_short_rows_default_to_empty():
    students = parse_csv(make_csv("t,أحمد"))

    assert students[0].grade == UNCLASSIFIED_GRADE
    assert students[0].nearest_landmark == ""


def test_parse_handles_crlf_and_bom():
    text = config.CSV_BOM + make_csv("t,أحمد,1,ذكر,الاول,059,لا,مسجد").replace("\n", "\r\n")

    students = parse_csv(text)

    assert students[0].timestamp == "t"
    assert students[0].nearest_landmark == "مسجد"


@pytest.mark.parametrize("text", ["", HEADER_LINE, HEADER_LINE + "\n\n"])
def test_parse_without_data_rows_raises(text):
    with pytest.raises(EmptyInputError):
        parse_csv(text)


# === serialize ===


def test_serialize_header_and_bom(sample_csv):
    text = serialize_csv(parse_csv(sample_csv), "2024-01-15")
    lines = text.split("\n")

    assert text.startswith(config.CSV_BOM)
    assert lines[0] == config.CSV_BOM + HEADER_LINE + ",حالة الحضور (2024-01-15)"
    assert len(lines) == 4


def test_serialize_quotes_every_field_and_attendance_column(sample_csv):
    students = parse_csv(sample_csv)
    students[0].mark_attendance("2024-01-15", "حاضر")

    lines = serialize_csv(students, "2024-01-15").split("\n")

    assert lines[1] == (
        '"t1","أحمد محمد","401","ذكر","الاول","0599123456","نعم","مسجد النور","حاضر"'
    )
    assert lines[2].endswith('"مسجد النور",""')


def test_serialize_doubles_embedded_quotes(sample_student):
    sample_student.full_name = 'أحمد "أبو علي"'

    line = serialize_csv([sample_student], "2024-01-15").split("\n")[1]

    assert '"أحمد ""أبو علي"""' in line


def test_serialize_empty_list_is_header_only():
    text = serialize_csv([], "2024-01-15")

    assert text.count("\n") == 0


def test_names_and_grades_survive_two_round_trips(sample_csv):
    original = parse_csv(sample_csv)

    once = parse_csv(serialize_csv(original, "2024-01-15"))
    twice = parse_csv(serialize_csv(once, "2024-01-15"))

    def identity(students):
        return {(s.full_name, s.grade) for s in students}

    assert identity(once) == identity(original)
    assert identity(twice) == identity(original)
