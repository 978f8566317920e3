from sqlmodel import Session, select
from app.core.errors import ValidationError
from app.models.want import Want
from app.schemas.want import WantCreate


def create_want(session: Session, owner_id: str, payload: WantCreate) -> Want:
    if not payload.title.strip():
        raise ValidationError('title is required')
    record = Want(title=payload.title, description=payload.description or None, owner_id=owner_id)
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


def list_wants(session: Session, owner_id: str) -> list[Want]:
    statement = (
        select(Want)
        .where(Want.owner_id == owner_id)
        .order_by(Want.created_at.desc())
    )
    return list(session.exec(statement).all())
