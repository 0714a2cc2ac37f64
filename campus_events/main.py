import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from campus_events.core.config import CORS_ORIGINS, get_static_dir, get_upload_dir
from campus_events.core.errors import AppError
from campus_events.core.logging import configure_logging
from campus_events.database.db import Base, engine
from campus_events.routes import analytics, announcements, auth, discussions, events, photos, registrations, users

configure_logging()

app = FastAPI(title="Campus Events API")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Create all tables (in production, use migrations such as Alembic)
Base.metadata.create_all(bind=engine)

os.makedirs(get_upload_dir(), exist_ok=True)
app.mount("/static", StaticFiles(directory=get_static_dir()), name="static")

# Include the routers
app.include_router(users.router)
app.include_router(auth.router)
app.include_router(events.router)
app.include_router(registrations.router)
app.include_router(analytics.router)
app.include_router(announcements.router)
app.include_router(discussions.router)
app.include_router(photos.router)
app.include_router(photos.storage_router)
