from pathlib import Path

from loguru import logger
from sqlmodel import Session

from app.core.errors import ForbiddenError, NotFoundError
from app.services.media_store import MediaStore
from app.services.request_service import can_view
from app.services.skill_service import get_skill


def open_skill_media(session: Session, media_store: MediaStore, viewer_id: str, skill_id: str) -> Path:
    skill = get_skill(session, skill_id)
    if not skill:
        raise NotFoundError('Video not found')
    if not can_view(session, viewer_id, skill):
        logger.info('stream.denied', skill_id=skill_id, user_id=viewer_id)
        raise ForbiddenError('No permission')
    return media_store.resolve(skill.video_path)
