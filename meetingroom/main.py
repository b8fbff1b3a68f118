import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from meetingroom.config import LOG_LEVEL
from meetingroom.db import SessionLocal, init_database
from meetingroom.routers import auth, rooms, reservations, schedules
from meetingroom.store import StoreError
from meetingroom.utils.auth import seed_admin

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    "lifespan for initing database"
    init_database()
    db = SessionLocal()
    try:
        seed_admin(db)
    finally:
        db.close()
    yield


app = FastAPI(
    lifespan=lifespan,
    title="Meeting room booker",
    description="Meeting room reservations with conflict checking, based on FastAPI.",
    version="0.1.0",
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT",
    },
)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "The reservation service is unavailable. Please try again later."},
    )


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}


app.include_router(auth.router)
app.include_router(rooms.router)
app.include_router(reservations.router)
app.include_router(schedules.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("meetingroom.main:app", host="0.0.0.0", port=8000, reload=True)
