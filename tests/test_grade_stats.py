import pytest

from services.grade_stats import (
    CategoryAverage,
    CourseRecord,
    GradeExtreme,
    SemesterAverage,
    calculate_stats,
    round_half_up,
)


def course(grade, credits=3, semester=1, category="חובה", name=None, **kw):
    return CourseRecord(
        name=name or f"course-{grade}-{credits}",
        credits=credits,
        grade=grade,
        semester=semester,
        category=category,
        **kw,
    )


def test_weighted_average_two_courses():
    stats = calculate_stats([course(90, 3), course(70, 2)], 120)
    # (90*3 + 70*2) / 5
    assert stats.average == 82.0
    assert stats.total_credits == 5


def test_weighted_average_is_rounded_to_two_places():
    stats = calculate_stats([course(85, 4), course(72.5, 3)], 120)
    # 557.5 / 7 = 79.642857...
    assert stats.average == 79.64


def test_empty_list_gives_zeroes():
    stats = calculate_stats([], 120)
    assert stats.average == 0
    assert stats.total_credits == 0
    assert stats.completed_percentage == 0
    assert stats.semester_averages == ()
    assert stats.category_averages == ()
    assert stats.max_grade is None
    assert stats.min_grade is None
    assert stats.current_semester == 1


def test_binary_courses_skip_average_but_count_when_passed():
    courses = [
        course(80, 3),
        course(0, 2, is_binary=True, is_pass=True, category="ספורט"),
        course(0, 1, is_binary=True, is_pass=False, category="ספורט"),
    ]
    stats = calculate_stats(courses, 120)
    assert stats.average == 80.0
    assert stats.total_credits == 5
    # binary rows never show up in the breakdowns
    assert [c.category for c in stats.category_averages] == ["חובה"]
    assert stats.min_grade == GradeExtreme("course-80-3", 80)


def test_all_binary_average_is_zero():
    stats = calculate_stats([course(100, 2, is_binary=True, is_pass=True)], 10)
    assert stats.average == 0
    assert stats.total_credits == 2
    assert stats.completed_percentage == 20.0


@pytest.mark.parametrize("grade,earned", [(54, 0), (54.9, 0), (55, 3), (100, 3)])
def test_passing_threshold(grade, earned):
    assert calculate_stats([course(grade, 3)], 120).total_credits == earned


def test_failed_courses_still_count_in_average():
    stats = calculate_stats([course(40, 2), course(100, 2)], 120)
    assert stats.average == 70.0
    assert stats.total_credits == 2


def test_completion_percentage_rounded_to_one_place():
    stats = calculate_stats([course(90, 10)], 120)
    assert stats.completed_percentage == 8.3


def test_completion_percentage_is_capped():
    stats = calculate_stats([course(90, 100), course(90, 100)], 120)
    assert stats.completed_percentage == 100.0


@pytest.mark.parametrize("needed", [0, -5])
def test_completion_guarded_for_non_positive_target(needed):
    assert calculate_stats([course(90, 3)], needed).completed_percentage == 0.0


def test_semester_averages_sorted_by_semester():
    courses = [
        course(80, 2, semester=3),
        course(90, 3, semester=1),
        course(70, 1, semester=1),
        course(60, 4, semester=2),
    ]
    stats = calculate_stats(courses, 120)
    assert [s.semester for s in stats.semester_averages] == [1, 2, 3]
    first = stats.semester_averages[0]
    assert first == SemesterAverage(semester=1, average=pytest.approx(85.0), credits=4)
    assert stats.current_semester == 3


def test_category_averages_keep_first_seen_order():
    courses = [
        course(70, 2, category="בחירה"),
        course(90, 2, category="חובה"),
        course(80, 2, category="בחירה"),
    ]
    stats = calculate_stats(courses, 120)
    assert stats.category_averages == (
        CategoryAverage(category="בחירה", average=75.0, credits=4),
        CategoryAverage(category="חובה", average=90.0, credits=2),
    )


def test_best_and_worst_ties_resolved_by_first_encountered():
    courses = [
        course(90, name="first-best"),
        course(50, name="first-worst"),
        course(90, name="second-best"),
        course(50, name="second-worst"),
    ]
    stats = calculate_stats(courses, 120)
    assert stats.max_grade == GradeExtreme("first-best", 90)
    assert stats.min_grade == GradeExtreme("first-worst", 50)


def test_same_input_same_output():
    courses = [course(88, 4, semester=2), course(61, 3, category="כללי")]
    assert calculate_stats(courses, 100) == calculate_stats(courses, 100)


def test_to_dict_shape():
    data = calculate_stats([course(90, 3, name="Algo")], 120).to_dict()
    assert data["average"] == 90.0
    assert data["semester_averages"] == [{"semester": 1, "average": 90.0, "credits": 3}]
    assert data["max_grade"] == {"name": "Algo", "grade": 90}


@pytest.mark.parametrize(
    "rows",
    [
        [(100, 1), (0, 1)],
        [(77, 5), (91, 2), (68, 4)],
        [(55, 3)],
    ],
)
def test_average_matches_formula(rows):
    courses = [course(g, c) for g, c in rows]
    expected = sum(g * c for g, c in rows) / sum(c for _, c in rows)
    assert calculate_stats(courses, 120).average == pytest.approx(expected, abs=0.005)


def test_round_half_up():
    assert round_half_up(0.25, 1) == 0.3
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(82, 2) == 82.0
