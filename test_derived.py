from types import SimpleNamespace

import pytest

from utils.derived import grade_letter, net_salary, percentage_of, result_outcome, result_total


@pytest.mark.parametrize('percentage, letter', [
    (100, 'A+'), (90, 'A+'), (89.99, 'A'), (80, 'A'), (79.5, 'B'), (70, 'B'),
    (69, 'C'), (60, 'C'), (59.9, 'D'), (50, 'D'), (49.99, 'F'), (0, 'F'), (None, 'F'),
])
def test_grade_letter_bands_are_lower_inclusive(percentage, letter):
    assert grade_letter(percentage) == letter


def test_net_salary_treats_missing_amounts_as_zero():
    assert net_salary(1000, 150, 50) == 900
    assert net_salary(1000) == 1000
    assert net_salary(1000, None, 200) == 1200
    assert net_salary(None, None, None) == 0


def test_result_total_adds_practical_score():
    assert result_total(40, 8) == 48
    assert result_total(40) == 40


def test_percentage_of_zero_total():
    assert percentage_of(10, 0) == 0.0
    assert percentage_of(45, 50) == 90


def test_graded_exam_outcome():
    exam = SimpleNamespace(total_marks=50, passing_marks=20, has_grading=True)
    assert result_outcome(45, exam=exam) == (True, 'A+')
    assert result_outcome(19, exam=exam) == (False, 'F')


def test_ungraded_exam_leaves_grade_alone():
    exam = SimpleNamespace(total_marks=100, passing_marks=35, has_grading=False)
    assert result_outcome(35, exam=exam) == (True, None)


def test_assignment_passes_at_half_marks():
    assignment = SimpleNamespace(total_marks=50)
    assert result_outcome(25, assignment=assignment) == (True, None)
    assert result_outcome(24.5, assignment=assignment) == (False, None)
