from typing import Optional
from sqlalchemy import or_
from sqlmodel import Session, select
from app.models.skill import Skill
from app.models.user import User
from app.models.want import Want


def list_matches(session: Session, user_id: str) -> list[tuple[Skill, Optional[User]]]:
    """Skills of other users whose title contains any of the user's want titles.

    Containment is case-insensitive and literal: ``%`` and ``_`` in a want
    title are escaped rather than treated as wildcards. Each skill appears
    once no matter how many wants it satisfies.
    """
    titles = session.exec(select(Want.title).where(Want.owner_id == user_id)).all()
    if not titles:
        return []

    clauses = [Skill.title.icontains(title, autoescape=True) for title in titles]
    statement = (
        select(Skill, User)
        .join(User, User.id == Skill.owner_id, isouter=True)
        .where(Skill.owner_id != user_id)
        .where(or_(*clauses))
        .order_by(Skill.created_at.desc())
    )
    return list(session.exec(statement).all())
