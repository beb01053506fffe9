"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chronoguard.config import settings
from chronoguard.database import database
from chronoguard.routers import auth, backup, reports, tasks, timesheets, users
from chronoguard.seed import seed_database


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Startup
    await database.connect()
    if settings.seed_on_startup:
        await seed_database(database.db)
    yield
    # Shutdown
    await database.disconnect()


app = FastAPI(
    title="ChronoGuard API",
    description="Timesheet and task tracking with validation and overtime reporting",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(tasks.router)
app.include_router(timesheets.router)
app.include_router(reports.router)
app.include_router(backup.router)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {"status": "ok", "message": "ChronoGuard API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
