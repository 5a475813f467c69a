"""
Références d'images à double mode.

Les colonnes logo_asset_id / photo_asset_id / route_map_image_id contiennent soit
une URL absolue (utilisée telle quelle), soit un chemin dans le stockage d'images.
"""
from dataclasses import dataclass
from typing import Union

from . import cloudinary_service


@dataclass(frozen=True)
class ExternalUrl:
    url: str


@dataclass(frozen=True)
class StoredAsset:
    path: str


AssetRef = Union[ExternalUrl, StoredAsset]


def parse_asset_ref(value: str | None) -> AssetRef | None:
    if not value or not value.strip():
        return None
    value = value.strip()
    if value.startswith(("http://", "https://")):
        return ExternalUrl(value)
    return StoredAsset(value)


def resolve_asset_url(value: str | None, bucket: str) -> str | None:
    ref = parse_asset_ref(value)
    if ref is None:
        return None
    if isinstance(ref, ExternalUrl):
        return ref.url
    return cloudinary_service.get_public_url(bucket, ref.path)
