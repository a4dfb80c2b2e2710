"""
Live class bookkeeping: participants, chat log and recordings.

This is an in-memory log only. Nothing is pushed to connected clients;
they poll messages and participants.
"""
import logging
from datetime import datetime
from typing import Optional

from smartschool.models import LiveClass, LiveClassMessage, LiveClassParticipant, LiveClassRecording
from smartschool.schemas import ApiResponse, failure, success
from smartschool.storage import EntityStore, new_id, utcnow

logger = logging.getLogger(__name__)

MESSAGE_PAGE_SIZE = 100


class LiveClassService:
    def __init__(self, store: EntityStore):
        self.store = store

    def get_live_classes(self) -> ApiResponse:
        return success(sorted(self.store.live_classes.values(), key=lambda c: c.scheduled_time))

    def create_live_class(
        self,
        scheduled_time: datetime,
        meeting_link: str,
        subject_id: Optional[str] = None,
        teacher_id: Optional[str] = None,
    ) -> ApiResponse:
        live_class = LiveClass(
            id=new_id("live"),
            subject_id=subject_id,
            teacher_id=teacher_id,
            scheduled_time=scheduled_time,
            meeting_link=meeting_link,
            status="scheduled",
        )
        with self.store.lock:
            self.store.live_classes[live_class.id] = live_class
        logger.info("🎥 Live class scheduled: %s at %s", live_class.id, scheduled_time.isoformat())
        return success(live_class, "Live class scheduled")

    # Participants

    def join(self, live_class_id: str, user_id: str) -> ApiResponse:
        with self.store.lock:
            if live_class_id not in self.store.live_classes:
                return failure("Failed to join live class")
            key = (live_class_id, user_id)
            participant = self.store.live_class_participants.get(key)
            if participant:
                participant.left_at = None
            else:
                participant = LiveClassParticipant(live_class_id=live_class_id, user_id=user_id, joined_at=utcnow())
                self.store.live_class_participants[key] = participant
        return success(participant, "Joined live class")

    def leave(self, live_class_id: str, user_id: str) -> ApiResponse:
        with self.store.lock:
            participant = self.store.live_class_participants.get((live_class_id, user_id))
            if not participant:
                return failure("Failed to leave live class", False)
            participant.left_at = utcnow()
        return success(True, "Left live class")

    def update_participant_status(
        self, live_class_id: str, user_id: str, camera_on: bool, microphone_on: bool
    ) -> ApiResponse:
        with self.store.lock:
            participant = self.store.live_class_participants.get((live_class_id, user_id))
            if not participant:
                return failure("Failed to update participant status")
            participant.camera_on = camera_on
            participant.microphone_on = microphone_on
        return success(participant)

    def raise_hand(self, live_class_id: str, user_id: str, raised: bool = True) -> ApiResponse:
        with self.store.lock:
            participant = self.store.live_class_participants.get((live_class_id, user_id))
            if not participant:
                return failure("Failed to update hand status")
            participant.hand_raised = raised
        return success(participant)

    def get_participants(self, live_class_id: str) -> ApiResponse:
        """Participants currently in the class (joined and not left)."""
        present = [
            p
            for (cid, _), p in self.store.live_class_participants.items()
            if cid == live_class_id and p.left_at is None
        ]
        return success(present)

    # Chat

    def send_message(self, live_class_id: str, user_id: str, message: str) -> ApiResponse:
        text = message.strip()
        if not text:
            return failure("Message cannot be empty")
        with self.store.lock:
            if live_class_id not in self.store.live_classes:
                return failure("Failed to send message")
            created = LiveClassMessage(
                id=new_id("msg"),
                live_class_id=live_class_id,
                user_id=user_id,
                message=text,
                created_at=utcnow(),
            )
            self.store.live_class_messages.setdefault(live_class_id, []).append(created)
        return success(created, "Message sent")

    def get_messages(self, live_class_id: str) -> ApiResponse:
        messages = self.store.live_class_messages.get(live_class_id, [])
        return success(messages[:MESSAGE_PAGE_SIZE])

    # Recording

    def start_recording(self, live_class_id: str, recording_url: str) -> ApiResponse:
        with self.store.lock:
            live_class = self.store.live_classes.get(live_class_id)
            if not live_class:
                return failure("Failed to start recording")
            recording = LiveClassRecording(
                id=new_id("rec"),
                live_class_id=live_class_id,
                recording_url=recording_url,
                started_at=utcnow(),
            )
            self.store.live_class_recordings[live_class_id] = recording
            live_class.status = "active"
        logger.info("⏺️ Recording started for live class %s", live_class_id)
        return success(recording, "Recording started")

    def stop_recording(self, live_class_id: str, duration: int) -> ApiResponse:
        with self.store.lock:
            recording = self.store.live_class_recordings.get(live_class_id)
            live_class = self.store.live_classes.get(live_class_id)
            if not recording or not live_class:
                return failure("Failed to stop recording")
            recording.duration = duration
            live_class.status = "ended"
        logger.info("⏹️ Recording stopped for live class %s (%ss)", live_class_id, duration)
        return success(recording, "Recording stopped")
