"""
Proctoring Oracle.

Sends webcam frames from an exam session to a vision model and records an
alert whenever the model reports an anomaly.
"""
import json
import logging
from typing import Any, List, Optional

from pydantic import BaseModel, Field, StrictBool, ValidationError

from smartschool.config import settings
from smartschool.models import ProctoringAlert
from smartschool.schemas import ApiResponse, success
from smartschool.services.llm_service import OracleFailure, StructuredLLMService
from smartschool.services.prompt_management import get_prompt
from smartschool.storage import EntityStore, new_id, utcnow

logger = logging.getLogger(__name__)

ANALYSIS_FAILED = "Analysis failed"
ANALYSIS_INCONCLUSIVE = "Analysis inconclusive"


class FrameAnalysis(BaseModel):
    anomaly: StrictBool
    description: str = Field(min_length=1)


def _image_url(frame_data: str) -> str:
    if frame_data.startswith("data:"):
        return frame_data
    return f"data:image/jpeg;base64,{frame_data}"


class ProctoringService:
    def __init__(
        self,
        store: EntityStore,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[Any] = None,
    ):
        self.store = store
        self.llm = StructuredLLMService(
            model=model or settings.proctoring_model,
            api_key=api_key,
            timeout=timeout,
            client=client,
        )

    async def analyze_frame(self, frame_data: str, exam_id: str = "", student_id: str = "") -> FrameAnalysis:
        """
        Ask the model whether a frame shows suspicious behaviour.

        Never raises: a failed call yields "Analysis failed" and a reply of
        the wrong shape yields "Analysis inconclusive", both without anomaly.
        """
        prompts = get_prompt("proctoring_analysis", exam_id=exam_id, student_id=student_id)
        content = [
            {"type": "text", "text": prompts["human_prompt"]},
            {"type": "image_url", "image_url": {"url": _image_url(frame_data)}},
        ]
        try:
            raw = await self.llm.complete_json(prompts["system_prompt"], content, temperature=0)
            parsed = json.loads(raw.strip())
        except (OracleFailure, ValueError) as e:
            logger.warning("⚠️ AI proctoring failed for %s/%s: %s", exam_id, student_id, e)
            return FrameAnalysis(anomaly=False, description=ANALYSIS_FAILED)

        try:
            return FrameAnalysis.model_validate(parsed)
        except ValidationError:
            return FrameAnalysis(anomaly=False, description=ANALYSIS_INCONCLUSIVE)

    async def record_frame(self, exam_id: str, student_id: str, frame_data: str) -> ApiResponse:
        logger.debug("📷 Proctor frame %s/%s: %s", exam_id, student_id, frame_data[:64])

        analysis = await self.analyze_frame(frame_data, exam_id, student_id)
        if analysis.anomaly:
            alert = ProctoringAlert(
                id=new_id("alert"),
                exam_id=exam_id,
                student_id=student_id,
                description=analysis.description,
                created_at=utcnow(),
            )
            with self.store.lock:
                self.store.proctoring_alerts.append(alert)
            logger.warning("🚨 Proctoring alert %s/%s: %s", exam_id, student_id, analysis.description)

        return success({"stored": True})

    def get_alerts(self, exam_id: Optional[str] = None) -> ApiResponse:
        alerts: List[ProctoringAlert] = [
            a for a in self.store.proctoring_alerts if not exam_id or a.exam_id == exam_id
        ]
        return success(alerts)
