from app.models.base import CreatedModel, IDModel, TimestampModel
from app.models.user import User
from app.models.skill import Skill
from app.models.want import Want
from app.models.access_request import AccessRequest
from app.models.permission import Permission

__all__ = [
    'IDModel',
    'CreatedModel',
    'TimestampModel',
    'User',
    'Skill',
    'Want',
    'AccessRequest',
    'Permission',
]
