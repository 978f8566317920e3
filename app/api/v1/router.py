from fastapi import APIRouter
from app.api.v1 import health, auth, me, skills, wants, matches, access_requests, stream
from app.core.config import settings

api_router = APIRouter(prefix=settings.API_V1_PREFIX)

api_router.include_router(health.router, tags=['health'])
api_router.include_router(auth.router)
api_router.include_router(me.router)
api_router.include_router(skills.router)
api_router.include_router(wants.router)
api_router.include_router(matches.router)
api_router.include_router(access_requests.router)
api_router.include_router(stream.router)
