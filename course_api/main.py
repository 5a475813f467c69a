import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .config import clear_settings_cache, get_settings
from .database import create_tables
from .errors import ContentError
from .routers import (
    admin_auth,
    admin_club,
    admin_dashboard,
    admin_editions,
    admin_forms,
    admin_practical,
    admin_sponsors,
    contact,
    public,
)

# Configuration du logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Variables d'environnement depuis .env (développement local)
backend_dir = Path(__file__).parent.parent
env_path = backend_dir / ".env"
loaded = load_dotenv(dotenv_path=env_path)
if loaded:
    logger.info(f"Variables d'environnement chargées depuis : {env_path}")
else:
    logger.warning(f"Aucun fichier .env chargé depuis : {env_path}")

# Les settings doivent relire l'environnement après load_dotenv
clear_settings_cache()
app_settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    logger.info("Tables vérifiées, API prête")
    yield


app = FastAPI(title=app_settings.app_name, version="0.1.0", redirect_slashes=False, lifespan=lifespan)

# CORS : CORS_ORIGIN accepte plusieurs origines séparées par des virgules
allowed_origins = [origin.strip() for origin in app_settings.cors_origin.split(",") if origin.strip()]
logger.info(f"Origines CORS autorisées : {allowed_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ContentError)
async def content_error_handler(request: Request, exc: ContentError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} : {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} : {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(public.router, prefix="/api")
app.include_router(contact.router, prefix="/api")
app.include_router(admin_auth.router, prefix="/api")
app.include_router(admin_dashboard.router, prefix="/api")
app.include_router(admin_editions.router, prefix="/api")
app.include_router(admin_club.router, prefix="/api")
app.include_router(admin_practical.router, prefix="/api")
app.include_router(admin_sponsors.router, prefix="/api")
app.include_router(admin_forms.router, prefix="/api")


@app.get("/", tags=["root"])
async def root():
    return {"message": "API de la Course des Traîne-Savates"}


@app.get("/api/health", tags=["health"])
async def health():
    return {"status": "ok", "server": "alive"}


@app.get("/favicon.ico", tags=["static"])
async def favicon():
    return Response(status_code=204)
