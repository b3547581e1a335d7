from services.export import CSV_COLUMNS, courses_to_csv, courses_to_frame, format_grade
from services.grade_stats import CourseRecord


def record(**kw):
    values = dict(name="Algo", credits=3, grade=90, semester=1, category="חובה", exam_type="A")
    values.update(kw)
    return CourseRecord(**values)


def test_csv_starts_with_bom_and_hebrew_headers():
    payload = courses_to_csv([record()])
    assert payload.startswith(b"\xef\xbb\xbf")
    lines = payload.decode("utf-8-sig").splitlines()
    assert lines[0] == ",".join(CSV_COLUMNS)
    assert lines[1] == "Algo,3,90,1,חובה,א'"


def test_second_sitting_and_binary_labels():
    lines = courses_to_csv(
        [
            record(exam_type="B", grade=72.5),
            record(name="Gym", is_binary=True, is_pass=True, category="ספורט"),
        ]
    ).decode("utf-8-sig").splitlines()
    assert lines[1] == "Algo,3,72.5,1,חובה,ב'"
    assert lines[2] == "Gym,3,עבר,1,ספורט,א'"


def test_names_with_commas_are_quoted():
    lines = courses_to_csv([record(name="Data, Structures")]).decode("utf-8-sig").splitlines()
    assert lines[1].startswith('"Data, Structures",')


def test_empty_export_has_only_headers():
    lines = courses_to_csv([]).decode("utf-8-sig").splitlines()
    assert lines == [",".join(CSV_COLUMNS)]


def test_frame_columns():
    frame = courses_to_frame([record(), record(name="Calc")])
    assert list(frame.columns) == CSV_COLUMNS
    assert list(frame["שם הקורס"]) == ["Algo", "Calc"]


def test_format_grade():
    assert format_grade(record(grade=88.0)) == "88"
    assert format_grade(record(is_binary=True, is_pass=False)) == "נכשל"
