from services.grade_stats import CourseRecord, calculate_stats
from services.what_if import (
    SIMULATED_CATEGORY,
    SIMULATED_SEMESTER,
    WhatIfEntry,
    entries_to_session,
    parse_entries,
    simulate,
)


def real_courses():
    return [CourseRecord(name="Calculus", credits=3, grade=90, semester=1, category="חובה")]


def test_simulation_blends_hypothetical_grades():
    stats = simulate(real_courses(), [WhatIfEntry(grade=60, credits=3)], 120)
    assert stats.average == 75.0
    assert stats.total_credits == 6


def test_simulated_rows_use_their_own_markers():
    stats = simulate(real_courses(), [WhatIfEntry(grade=70)], 120)
    assert stats.semester_averages[-1].semester == SIMULATED_SEMESTER
    assert SIMULATED_CATEGORY in [c.category for c in stats.category_averages]


def test_simulation_leaves_real_courses_untouched():
    courses = real_courses()
    simulate(courses, [WhatIfEntry(grade=40, credits=5)], 120)
    assert len(courses) == 1
    assert calculate_stats(courses, 120).average == 90.0


def test_no_entries_matches_real_stats():
    assert simulate(real_courses(), [], 120) == calculate_stats(real_courses(), 120)


def test_parse_entries_skips_garbage_and_defaults_credits():
    raw = [
        {"grade": "88", "credits": ""},
        {"grade": "not a number"},
        "junk",
        {"credits": 2},
        {"grade": 70, "credits": 4, "name": "Physics"},
    ]
    entries = parse_entries(raw)
    assert entries == [
        WhatIfEntry(grade=88.0, credits=3),
        WhatIfEntry(grade=70.0, credits=4, name="Physics"),
    ]


def test_session_roundtrip():
    entries = [WhatIfEntry(grade=95, credits=2)]
    assert parse_entries(entries_to_session(entries)) == entries


def test_parse_entries_handles_missing_session():
    assert parse_entries(None) == []
