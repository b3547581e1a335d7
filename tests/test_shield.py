import pytest

from services.shield import (
    calculate_required_exam,
    calculate_shield,
    evaluate_shield,
    required_exam_display,
)


def test_shield_example():
    assert calculate_shield(85, 30, 60) == pytest.approx(67.5)


def test_full_shield_weight_is_shield_grade():
    assert calculate_shield(85, 100, 20) == pytest.approx(85)


def test_zero_shield_weight_is_exam_grade():
    assert calculate_shield(85, 0, 47) == pytest.approx(47)


@pytest.mark.parametrize("weight", [1, 25, 50, 99])
def test_shield_monotonic_in_exam_grade(weight):
    finals = [calculate_shield(70, weight, exam) for exam in range(0, 101, 10)]
    assert finals == sorted(finals)
    assert len(set(finals)) == len(finals)


def test_required_exam_example():
    assert calculate_required_exam(85, 30, 55) == pytest.approx(42.142857, abs=1e-4)


def test_required_exam_defaults_to_passing_target():
    assert calculate_required_exam(85, 30) == calculate_required_exam(85, 30, 55)


def test_required_exam_full_weight_guard():
    assert calculate_required_exam(85, 100, 55) == 0


@pytest.mark.parametrize(
    "shield,weight,target",
    [(85, 30, 55), (40, 50, 60), (100, 20, 90), (0, 75, 55), (62.5, 33.3, 71)],
)
def test_required_exam_inverts_shield(shield, weight, target):
    exam = calculate_required_exam(shield, weight, target)
    assert calculate_shield(shield, weight, exam) == pytest.approx(target)


def test_required_exam_display_rounds_up_and_floors_at_zero():
    assert required_exam_display(85, 30) == 43
    # the shield alone already passes
    assert required_exam_display(100, 60) == 0


def test_evaluate_shield_bundle():
    result = evaluate_shield(85, 30, 60)
    assert result.final_grade == pytest.approx(67.5)
    assert result.required_exam == 43
    assert result.to_dict()["shield_weight"] == 30
