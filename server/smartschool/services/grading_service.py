"""
Essay Grading Oracle.

Scores a free-text answer against a rubric. The caller always gets a
result: on any failure the answer earns half the points (rounded down).
"""
import logging
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from smartschool.config import settings
from smartschool.services.llm_service import OracleFailure, StructuredLLMService
from smartschool.services.prompt_management import get_prompt

logger = logging.getLogger(__name__)

GRADING_FALLBACK_FEEDBACK = "Grading failed, assigned default score."


class EssayGrade(BaseModel):
    score: float = Field(strict=True, allow_inf_nan=False)
    feedback: str = Field(min_length=1)


def fallback_grade(max_points: int) -> EssayGrade:
    return EssayGrade(score=max_points // 2, feedback=GRADING_FALLBACK_FEEDBACK)


class GradingService:
    """Grading oracle backed by an OpenAI chat model."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[Any] = None,
    ):
        self.llm = StructuredLLMService(
            model=model or settings.grading_model,
            api_key=api_key,
            timeout=timeout,
            client=client,
        )

    async def grade_essay(self, question_text: str, essay: str, rubric: str, max_points: int) -> EssayGrade:
        """
        Grade an essay answer.

        Returns:
            EssayGrade with score clamped to [0, max_points], or the fallback
            grade when the model call fails or its reply is malformed.
        """
        prompts = get_prompt(
            "essay_grading",
            question_text=question_text,
            essay=essay,
            rubric=rubric or "No rubric provided.",
            max_points=max_points,
        )
        try:
            raw = await self.llm.complete_json(prompts["system_prompt"], prompts["human_prompt"])
            result = EssayGrade.model_validate_json(raw)
        except (OracleFailure, ValidationError) as e:
            logger.warning("⚠️ AI grading failed, assigning %s/%s: %s", max_points // 2, max_points, e)
            return fallback_grade(max_points)

        score = min(max(result.score, 0), max_points)
        return EssayGrade(score=score, feedback=result.feedback)
