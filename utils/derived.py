"""
Values the server computes from other fields of a record.

Shared by the form actions and the list views so a client can never
submit its own net salary, total or grade.
"""

GRADE_BANDS = [
    (90, 'A+'),
    (80, 'A'),
    (70, 'B'),
    (60, 'C'),
    (50, 'D'),
]


def _number(value):
    return 0 if value is None else value


def grade_letter(percentage):
    """Letter grade for a percentage; each band's lower bound is inclusive"""
    percentage = _number(percentage)
    for lower_bound, letter in GRADE_BANDS:
        if percentage >= lower_bound:
            return letter
    return 'F'


def net_salary(amount, tax_amount=None, bonus_amount=None):
    return _number(amount) - _number(tax_amount) + _number(bonus_amount)


def result_total(score, practical_score=None):
    return _number(score) + _number(practical_score)


def percentage_of(obtained, total):
    if not total:
        return 0.0
    return _number(obtained) / total * 100


def result_outcome(total, exam=None, assignment=None):
    """Return ``(is_passed, grade)`` for a result total.

    An exam passes at its passing marks and is only graded when it has
    grading enabled; an assignment passes at half of its total marks.
    A grade of None means the caller keeps whatever grade was entered.
    """
    if exam is not None:
        is_passed = total >= _number(exam.passing_marks)
        grade = grade_letter(percentage_of(total, exam.total_marks)) if exam.has_grading else None
        return is_passed, grade
    if assignment is not None:
        return total >= _number(assignment.total_marks) * 0.5, None
    return False, None
