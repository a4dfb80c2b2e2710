"""Score calculation for a set of exam answers."""
import logging
from typing import Dict

from smartschool.models import ActiveExam, QuestionType
from smartschool.services.grading_service import GradingService

logger = logging.getLogger(__name__)


async def calculate_score(exam: ActiveExam, answers: Dict[str, str], grading: GradingService) -> float:
    """
    Total the points earned by `answers` on `exam`.

    Objective questions earn their points on an exact match with the correct
    answer. Auto-graded essays are scored by the grading oracle; manual
    essays and blank answers earn nothing. Sessions are never touched.
    """
    total = 0.0
    for question in exam.questions:
        answer = answers.get(question.id)
        if not answer:
            continue

        if question.type != QuestionType.ESSAY:
            if answer == question.correct_answer:
                total += question.points
        elif question.is_auto_grade:
            grade = await grading.grade_essay(question.text, answer, question.rubric or "", question.points)
            total += grade.score

    logger.debug("🧮 Exam %s scored %s/%s", exam.id, total, sum(q.points for q in exam.questions))
    return total
