# Configuration de la base de données avec SQLAlchemy.
#
# - Développement local : SQLite (course.db) par défaut.
# - Production : la base indiquée par DATABASE_URL (PostgreSQL en pratique).

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

logger = logging.getLogger(__name__)

backend_dir = Path(__file__).parent.parent
load_dotenv(dotenv_path=backend_dir / ".env")

env_database_url = os.getenv("DATABASE_URL", "").strip()

IS_POSTGRES = bool(env_database_url) and env_database_url.startswith("postgres")

if env_database_url:
    DATABASE_URL = env_database_url
else:
    DATABASE_URL = "sqlite:///./course.db"
    logger.info("DATABASE_URL absente, utilisation de SQLite local (course.db)")

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    connect_args=connect_args,
    pool_pre_ping=True,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def create_tables() -> None:
    """Crée les tables manquantes. Tous les modèles doivent être importés avant."""
    from . import models  # noqa: F401

    expected_tables = list(Base.metadata.tables.keys())
    logger.info(f"Tables attendues : {', '.join(expected_tables)}")
    Base.metadata.create_all(bind=engine)


def get_db():
    """
    Dépendance FastAPI : une session par requête, fermée à la fin de la requête.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
