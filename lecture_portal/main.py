import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS, HOST, LOG_LEVEL, PORT
from .controllers import admin, auth, courses, lectures, referrals, schedule, weeks
from .database import init_db
from .services.status_watcher import StatusWatcher

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Lecture Portal")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    init_db()
    app.state.status_watcher = StatusWatcher()
    app.state.scheduler = AsyncIOScheduler()
    app.state.status_watcher.schedule(app.state.scheduler)
    app.state.scheduler.start()
    logger.info("Lecture Portal started with %d routes", len(app.routes))


@app.on_event("shutdown")
async def shutdown():
    app.state.scheduler.shutdown()


app.include_router(auth.router)
app.include_router(referrals.landing_router)
app.include_router(referrals.router)
app.include_router(courses.router)
app.include_router(weeks.router)
app.include_router(lectures.router)
app.include_router(schedule.router)
app.include_router(admin.router)


@app.get("/")
def root():
    return {"name": "Lecture Portal", "status": "ok"}


def run():
    import uvicorn

    uvicorn.run("lecture_portal.main:app", host=HOST, port=PORT)


if __name__ == "__main__":
    run()
