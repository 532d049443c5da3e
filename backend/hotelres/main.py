"""
hotelres application entry point
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from hotelres.config import settings
from hotelres.database import init_db
from hotelres.routers import auth, rooms, cart, reservations, users, profile, dashboard

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()

    from hotelres.services.cart_service import register_cart_handlers
    register_cart_handlers()

    logger.info(f"{settings.APP_NAME} started")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Hotel room booking with carts, reservations and an admin panel",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(rooms.router)
app.include_router(cart.router)
app.include_router(reservations.router)
app.include_router(users.router)
app.include_router(profile.router)
app.include_router(dashboard.router)

Path(settings.AVATAR_DIR).mkdir(parents=True, exist_ok=True)
app.mount(settings.AVATAR_BASE_URL, StaticFiles(directory=settings.AVATAR_DIR), name="avatars")


@app.get("/")
def root():
    return {
        "name": settings.APP_NAME,
        "version": "1.0.0",
    }


@app.get("/health")
def health_check():
    """Health check"""
    return {"status": "healthy"}
