import logging
from datetime import datetime, timezone

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import auth_router
from config import Settings, get_settings
from database import init_db
from errors import register_exception_handlers
from router import router
from schemas import HealthStatus
from users import users_router

settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

init_db()

app = FastAPI(title=settings.app_name, version=settings.version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

app.include_router(auth_router, prefix="/auth", tags=["authentication"])
app.include_router(users_router, tags=["users"])
app.include_router(router, tags=["expenses"])


@app.get("/")
def home():
    return {"message": "Welcome to the Expense Tracker API"}


@app.get("/health", response_model=HealthStatus)
def health(settings: Settings = Depends(get_settings)):
    return HealthStatus(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        message="API is running",
        version=settings.version,
    )


if __name__ == "__main__":
    logger.info(
        "Starting in %s mode on http://localhost:%d",
        settings.environment,
        settings.port,
    )
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
