# tests/test_quick_check_service.py

import pytest
from fastapi import HTTPException

from models.readiness import QuickCheckLevel
from services.quick_check_service import QUICK_CHECK_MESSAGES, QuickCheckService


def test_five_four_option_questions():
    questions = QuickCheckService.get_questions()

    assert len(questions) == 5
    assert all(q.scores == [4, 3, 2, 1] and len(q.options) == 4 for q in questions)


@pytest.mark.parametrize("answers, total, level", [
    ([0, 0, 0, 0, 0], 20, QuickCheckLevel.HIGH),
    ([1, 1, 1, 1, 1], 15, QuickCheckLevel.MEDIUM),   # 75%
    ([0, 0, 1, 1, 2], 16, QuickCheckLevel.HIGH),     # 80% exactly
    ([1, 1, 2, 2, 2], 12, QuickCheckLevel.MEDIUM),   # 60% exactly
    ([3, 3, 3, 3, 3], 5, QuickCheckLevel.LOW),
])
def test_scores_and_levels(answers, total, level):
    result = QuickCheckService.score(answers)

    assert result.total_score == total
    assert result.max_score == 20
    assert result.level == level
    assert result.message == QUICK_CHECK_MESSAGES[level]


def test_partial_answers_score_against_full_max():
    result = QuickCheckService.score([0, 0])

    assert result.total_score == 8
    assert result.percentage == 40
    assert result.level == QuickCheckLevel.LOW


@pytest.mark.parametrize("answers", [[4], [-1], [0, 0, 0, 0, 0, 0]])
def test_rejects_malformed_answers(answers):
    with pytest.raises(HTTPException) as exc_info:
        QuickCheckService.score(answers)

    assert exc_info.value.status_code == 400
