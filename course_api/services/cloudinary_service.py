"""
Stockage d'images sur Cloudinary (logos sponsors, photos du comité, cartes de parcours).

Un "bucket" correspond à un dossier racine Cloudinary ; le chemin stocké en base
est relatif au bucket, par exemple "sponsors/3f2c...e1.png".
"""
import logging
import os
import uuid
from pathlib import PurePosixPath

import cloudinary
import cloudinary.uploader
import cloudinary.utils

from ..errors import RequestFailure

logger = logging.getLogger(__name__)

SPONSOR_LOGOS_BUCKET = "sponsor-logos"
COMMITTEE_PHOTOS_BUCKET = "committee-photos"
ROUTE_MAPS_BUCKET = "route-maps"

_cloudinary_configured = False


def _ensure_cloudinary_configured():
    """Configure Cloudinary à la demande, une fois les variables d'environnement chargées."""
    global _cloudinary_configured
    if _cloudinary_configured:
        return

    cloudinary.config(
        cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME"),
        api_key=os.getenv("CLOUDINARY_API_KEY"),
        api_secret=os.getenv("CLOUDINARY_API_SECRET"),
        secure=True
    )
    _cloudinary_configured = True


def generate_asset_path(folder: str, filename: str | None) -> str:
    """
    Construit "<dossier>/<uuid>.<extension d'origine>" ; "png" si le fichier n'a pas d'extension.
    """
    ext = PurePosixPath(filename or "").suffix.lstrip(".").lower() or "png"
    return f"{folder}/{uuid.uuid4()}.{ext}"


def _public_id(bucket: str, path: str) -> tuple[str, str | None]:
    """Sépare l'extension du chemin : Cloudinary la gère comme un format, pas comme un nom."""
    pure = PurePosixPath(path)
    ext = pure.suffix.lstrip(".") or None
    stem = str(pure.with_suffix("")) if ext else path
    return f"{bucket}/{stem}", ext


def upload(bucket: str, path: str, contents: bytes, upsert: bool = True) -> None:
    """
    Envoie un fichier dans le bucket au chemin donné.

    Lève RequestFailure si Cloudinary refuse l'envoi.
    """
    _ensure_cloudinary_configured()
    public_id, ext = _public_id(bucket, path)
    options = {"public_id": public_id, "overwrite": upsert, "resource_type": "image"}
    if ext:
        options["format"] = ext
    try:
        cloudinary.uploader.upload(contents, **options)
    except Exception as e:
        logger.error(f"Échec de l'upload Cloudinary {public_id}: {str(e)}")
        raise RequestFailure(f"Erreur lors de l'upload de l'image : {str(e)}") from e
    logger.info(f"Image envoyée sur Cloudinary : {public_id}")


def get_public_url(bucket: str, path: str) -> str:
    """URL publique d'un chemin du bucket. Aucun appel réseau."""
    _ensure_cloudinary_configured()
    public_id, ext = _public_id(bucket, path)
    options = {"resource_type": "image", "secure": True}
    if ext:
        options["format"] = ext
    url, _ = cloudinary.utils.cloudinary_url(public_id, **options)
    return url


def delete(bucket: str, path: str) -> bool:
    """Supprime une image ; False si Cloudinary ne confirme pas la suppression."""
    _ensure_cloudinary_configured()
    public_id, _ = _public_id(bucket, path)
    try:
        result = cloudinary.uploader.destroy(public_id)
    except Exception as e:
        logger.warning(f"Suppression Cloudinary impossible pour {public_id}: {str(e)}")
        return False
    return result.get("result") == "ok"
