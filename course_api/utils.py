import re
import unicodedata
import uuid
from datetime import datetime, timezone


def slugify(text: str) -> str:
    """
    Génère un slug à partir d'un texte, en normalisant les accents.

    Exemples :
    - "Course des Traîne-Savates" -> "course-des-traine-savates"
    - "10 km Élite" -> "10-km-elite"
    """
    if not text:
        return ""

    slug = text.lower().strip()

    # NFD sépare les caractères de base des diacritiques
    slug = unicodedata.normalize('NFD', slug)
    slug = ''.join(char for char in slug if unicodedata.category(char) != 'Mn')

    slug = re.sub(r'\s+', '-', slug)
    slug = re.sub(r'[^a-z0-9\-]+', '', slug)
    slug = re.sub(r'\-+', '-', slug)

    return slug.strip('-')


def new_id() -> str:
    """Identifiant opaque pour les lignes persistées."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
