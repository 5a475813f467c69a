"""
Demande au frontend de revalider ses pages en cache après une modification admin,
pour que le site public reflète immédiatement les changements.
"""
import logging

import httpx

from ..config import get_settings

logger = logging.getLogger(__name__)


async def revalidate_frontend(
    type: str | None = None,
    paths: list[str] | None = None,
    tags: list[str] | None = None
) -> bool:
    """
    Notifie le frontend qu'il doit revalider certaines pages.

    Args:
        type: Type de contenu modifié ("editions", "club", "sponsors", "practical", "faq")
        paths: Chemins précis à revalider (ex : ["/editions/2025"])
        tags: Tags de cache à revalider

    Returns:
        True si le frontend a confirmé, False sinon (ou si aucun frontend n'est configuré)
    """
    settings = get_settings()
    if not settings.frontend_url:
        logger.debug("[Revalidate] FRONTEND_URL absent, revalidation ignorée")
        return False

    url = f"{settings.frontend_url.rstrip('/')}/api/revalidate"
    payload = {"secret": settings.revalidate_secret}
    if type:
        payload["type"] = type
    if paths:
        payload["paths"] = paths
    if tags:
        payload["tags"] = tags

    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            response = await client.post(url, json=payload)
    except httpx.TimeoutException:
        logger.warning("[Revalidate] Timeout, frontend lent ou indisponible")
        return False
    except httpx.HTTPError as e:
        logger.warning(f"[Revalidate] Erreur : {e}")
        return False

    if response.status_code == 200:
        logger.info(f"[Revalidate] OK : {paths or type}")
        return True
    logger.warning(f"[Revalidate] Échec, statut {response.status_code}: {response.text}")
    return False


async def revalidate_editions(slug: str | None = None):
    """Accueil, page édition et, si connu, la page de l'édition modifiée."""
    paths = ["/", "/edition"]
    if slug:
        paths.append(f"/editions/{slug}")
    return await revalidate_frontend(type="editions", paths=paths)


async def revalidate_club():
    return await revalidate_frontend(type="club", paths=["/", "/club"])


async def revalidate_sponsors():
    return await revalidate_frontend(type="sponsors", paths=["/", "/sponsors"])


async def revalidate_practical():
    return await revalidate_frontend(type="practical", paths=["/", "/infos-pratiques", "/faq"])
