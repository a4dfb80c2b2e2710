from fastapi import APIRouter, Depends

from smartschool.dependencies import get_live_class_service
from smartschool.schemas import (
    CreateLiveClassRequest,
    LiveClassMessageRequest,
    LiveClassUserRequest,
    ParticipantStatusRequest,
    RaiseHandRequest,
    StartRecordingRequest,
    StopRecordingRequest,
)
from smartschool.services.live_class_service import LiveClassService

router = APIRouter(prefix="/live-classes", tags=["Live Classes"])


@router.get("")
async def list_live_classes(service: LiveClassService = Depends(get_live_class_service)):
    return service.get_live_classes()


@router.post("")
async def create_live_class(
    request: CreateLiveClassRequest,
    service: LiveClassService = Depends(get_live_class_service),
):
    return service.create_live_class(
        request.scheduled_time,
        request.meeting_link,
        subject_id=request.subject_id,
        teacher_id=request.teacher_id,
    )


@router.post("/{live_class_id}/join")
async def join(
    live_class_id: str,
    request: LiveClassUserRequest,
    service: LiveClassService = Depends(get_live_class_service),
):
    return service.join(live_class_id, request.user_id)


@router.post("/{live_class_id}/leave")
async def leave(
    live_class_id: str,
    request: LiveClassUserRequest,
    service: LiveClassService = Depends(get_live_class_service),
):
    return service.leave(live_class_id, request.user_id)


@router.post("/{live_class_id}/participant-status")
async def participant_status(
    live_class_id: str,
    request: ParticipantStatusRequest,
    service: LiveClassService = Depends(get_live_class_service),
):
    return service.update_participant_status(live_class_id, request.user_id, request.camera_on, request.microphone_on)


@router.post("/{live_class_id}/raise-hand")
async def raise_hand(
    live_class_id: str,
    request: RaiseHandRequest,
    service: LiveClassService = Depends(get_live_class_service),
):
    return service.raise_hand(live_class_id, request.user_id, request.raised)


@router.post("/{live_class_id}/messages")
async def send_message(
    live_class_id: str,
    request: LiveClassMessageRequest,
    service: LiveClassService = Depends(get_live_class_service),
):
    return service.send_message(live_class_id, request.user_id, request.message)


@router.get("/{live_class_id}/messages")
async def get_messages(live_class_id: str, service: LiveClassService = Depends(get_live_class_service)):
    return service.get_messages(live_class_id)


@router.get("/{live_class_id}/participants")
async def get_participants(live_class_id: str, service: LiveClassService = Depends(get_live_class_service)):
    return service.get_participants(live_class_id)


@router.post("/{live_class_id}/recording/start")
async def start_recording(
    live_class_id: str,
    request: StartRecordingRequest,
    service: LiveClassService = Depends(get_live_class_service),
):
    return service.start_recording(live_class_id, request.recording_url)


@router.post("/{live_class_id}/recording/stop")
async def stop_recording(
    live_class_id: str,
    request: StopRecordingRequest,
    service: LiveClassService = Depends(get_live_class_service),
):
    return service.stop_recording(live_class_id, request.duration)
