# EduEgy backend entrypoint: parent-student linking API over FastAPI.

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.app.core.dev_seed import ensure_default_admin
from backend.app.core.exceptions import EduEgyError
from backend.app.core.settings import get_settings
from backend.app.api import logs
from backend.app.api import parent_linking
from backend.app.api import student_linking
from backend.app.api import users
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(student_linking.router)
app.include_router(parent_linking.router)
app.include_router(users.router)
app.include_router(logs.router)


@app.exception_handler(EduEgyError)
async def eduegy_error_handler(request: Request, exc: EduEgyError):
    logger.info("%s %s failed: %s", request.method, request.url.path, exc.kind)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "kind": exc.kind, "message": exc.message},
    )


@app.get("/")
def read_root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def init_database():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_default_admin(db)
    finally:
        db.close()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.app.main:app", host=settings.api_host, port=settings.api_port, reload=settings.environment == "development")
