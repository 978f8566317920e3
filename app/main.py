from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from app.api.v1.router import api_router
from app.core.config import settings
from app.core.logging import configure_logging
from app.db.init_db import init_db
from app.services.media_store import get_media_store

configure_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(_: FastAPI):
    upload_dir = get_media_store().ensure_root()
    init_db()
    logger.info('app.started', env=settings.ENV, upload_dir=str(upload_dir.resolve()))
    yield
    logger.info('app.stopped')

app = FastAPI(title=settings.PROJECT_NAME, debug=settings.DEBUG, lifespan=lifespan)

allow_origins = settings.CORS_ORIGINS
allow_credentials = '*' not in allow_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=allow_credentials,
    allow_methods=['*'],
    allow_headers=['*'],
)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error('http.unhandled', method=request.method, path=request.url.path)
    return JSONResponse(status_code=500, content={'detail': 'Internal server error'})


app.include_router(api_router)


@app.get('/', include_in_schema=False)
def root() -> dict:
    return {'ok': True}
