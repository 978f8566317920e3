from typing import BinaryIO, Optional
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select
from app.core.errors import ValidationError
from app.models.skill import Skill
from app.models.user import User
from app.schemas.skill import SkillOut
from app.services.media_store import MediaStore
from app.services.user_service import to_user_summary


def to_skill_out(skill: Skill, owner: Optional[User] = None) -> SkillOut:
    return SkillOut(
        id=skill.id,
        title=skill.title,
        description=skill.description,
        video_path=skill.video_path,
        owner_id=skill.owner_id,
        created_at=skill.created_at,
        owner=to_user_summary(owner),
    )


def create_skill(
    session: Session,
    media_store: MediaStore,
    owner_id: str,
    title: Optional[str],
    description: Optional[str],
    video_name: Optional[str],
    video: Optional[BinaryIO],
) -> Skill:
    if not title or not title.strip():
        raise ValidationError('title is required')
    if video is None:
        raise ValidationError('Video required')

    reference = media_store.save(video_name, video)
    skill = Skill(
        title=title,
        description=description or None,
        video_path=reference,
        owner_id=owner_id,
    )
    session.add(skill)
    try:
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        media_store.delete(reference)
        raise
    session.refresh(skill)
    logger.info('skill.created', skill_id=skill.id, owner_id=owner_id)
    return skill


def get_skill(session: Session, skill_id: str) -> Optional[Skill]:
    return session.exec(select(Skill).where(Skill.id == skill_id)).first()


def list_skills(session: Session) -> list[tuple[Skill, Optional[User]]]:
    statement = (
        select(Skill, User)
        .join(User, User.id == Skill.owner_id, isouter=True)
        .order_by(Skill.created_at.desc())
    )
    return list(session.exec(statement).all())
