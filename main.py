"""
Lift Log Service
FastAPI application for recording lifts and reviewing the training history

Run with: uvicorn main:app --reload --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from database import init_db

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("lift_log")

# Import routers
from routers import history_router, workouts_router

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(
        "Lift log started (policy=%s, top_n=%d, timezone=%s)",
        settings.policy, settings.top_n, settings.timezone,
    )
    yield


# Create FastAPI app
app = FastAPI(
    title="Lift Log",
    description="""
    ## Personal Strength Training Log

    ### Workouts
    - **Record**: Log weight and reps for bench, squat, deadlift or any assistance exercise
    - **Correct / Delete**: Fix the weight and reps of a set, or remove it

    ### History
    - **Daily Summary**: Best sets per lift per day, ranked by estimated 1RM
    - **Export**: Download the summary as CSV or an Excel spreadsheet

    ---

    **Tech Stack**: Python, FastAPI, SQLAlchemy, pandas
    """,
    version=VERSION,
    docs_url="/docs",  # Swagger UI
    redoc_url="/redoc",  # ReDoc alternative
    lifespan=lifespan,
)

# Configure CORS to allow requests from the frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Check if the service is running"""
    return {
        "status": "healthy",
        "service": "lift-log",
        "version": VERSION
    }


# Include routers
app.include_router(workouts_router)
app.include_router(history_router)


# Root endpoint with service info
@app.get("/", tags=["Info"])
async def root():
    """Service information and available endpoints"""
    return {
        "service": "Lift Log",
        "version": VERSION,
        "documentation": "/docs",
        "endpoints": {
            "workouts": {
                "list": "GET /workouts",
                "record": "POST /workouts",
                "record_lift": "POST /workouts/{lift}",
                "update": "PATCH /workouts/{entry_id}",
                "delete": "DELETE /workouts/{entry_id}",
                "defaults": "GET /workouts/assistance-exercises"
            },
            "history": {
                "summary": "GET /history",
                "export": "GET /history/export?format=csv|xlsx"
            }
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=settings.port, reload=True)
