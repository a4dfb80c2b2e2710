from datetime import datetime
from typing import Literal, Optional

from smartschool.models.base import CamelModel


LiveClassStatus = Literal["scheduled", "active", "ended"]


class LiveClass(CamelModel):
    id: str
    subject_id: Optional[str] = None
    teacher_id: Optional[str] = None
    scheduled_time: datetime
    meeting_link: str
    status: LiveClassStatus = "scheduled"


class LiveClassParticipant(CamelModel):
    live_class_id: str
    user_id: str
    joined_at: datetime
    left_at: Optional[datetime] = None
    camera_on: bool = False
    microphone_on: bool = False
    hand_raised: bool = False


class LiveClassMessage(CamelModel):
    id: str
    live_class_id: str
    user_id: str
    message: str
    created_at: datetime


class LiveClassRecording(CamelModel):
    id: str
    live_class_id: str
    recording_url: str
    started_at: datetime
    duration: int = 0  # Seconds
