"""
Per-asset transfer: download from the source CDN, stage locally, upload.

Assets are staged in ``staging_dir`` under the base name of their key, so
``assets/logo.png`` and ``snippets/logo.png`` share one staged file.  The
staged file is removed only after a successful upload; a failed upload
leaves it behind and :class:`AssetOutcome` records its path.
"""

from __future__ import annotations

import base64
import os
from dataclasses import dataclass
from typing import Optional

import requests

from models.shopify_theme import Asset
from src.migrators.shopify_client import DEFAULT_TIMEOUT, put_json
from src.utils.config import MigrationConfig
from src.utils.errors import CONFIG, HTTP_STATUS, NETWORK, STAGING, Result

MIGRATED = "migrated"
FAILED = "failed"
SKIPPED = "skipped"
DRY_RUN = "dry-run"


@dataclass(frozen=True)
class AssetOutcome:
    key: str
    status: str
    code: Optional[str] = None
    message: str = ""
    # Set when a failed upload left the staged file on disk.
    staged_path: Optional[str] = None


def staged_file_name(key: str) -> str:
    """Return the local file name used to stage the asset ``key``."""
    return os.path.basename(key)


def download_asset(asset: Asset, staging_dir: str = ".", *, timeout: float = DEFAULT_TIMEOUT) -> Result[str]:
    """
    Download ``asset.public_url`` and write its bytes to the staging dir.

    The public URL is fetched without the access token.  Nothing is written
    unless the download succeeds.

    :return: ``Result`` holding the staged file path.
    """
    try:
        resp = requests.get(asset.public_url, timeout=timeout)
    except requests.RequestException as e:
        return Result.failure(NETWORK, f"Error downloading {asset.key}: {e}")
    if not resp.ok:
        return Result.failure(HTTP_STATUS, f"Error downloading {asset.key}: {resp.reason}")

    path = os.path.join(staging_dir, staged_file_name(asset.key))
    if os.path.exists(path):
        print(f"[WARNING] Overwriting staged file {path} while downloading {asset.key}")
    try:
        os.makedirs(staging_dir, exist_ok=True)
        with open(path, "wb") as f:
            f.write(resp.content)
    except OSError as e:
        return Result.failure(STAGING, f"Error staging {asset.key}: {e}")
    return Result.success(path)


def upload_asset(
    domain: str,
    token: Optional[str],
    theme_id: int,
    key: str,
    staged_path: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> Result[str]:
    """
    Upload a staged file to ``themes/{theme_id}/assets.json`` under ``key``.

    The file content is sent base64-encoded in the ``attachment`` field.
    On success the staged file is deleted; on failure it is kept.

    :return: ``Result`` holding ``key`` on success.
    """
    if not token:
        return Result.failure(CONFIG, "Destination store token is not defined")

    try:
        with open(staged_path, "rb") as f:
            data = f.read()
    except OSError as e:
        return Result.failure(STAGING, f"Error reading staged file for {key}: {e}")

    payload = {
        "asset": {
            "key": key,
            "attachment": base64.b64encode(data).decode("ascii"),
        },
    }
    resp = put_json(domain, token, f"themes/{theme_id}/assets.json", payload, timeout=timeout)
    if not resp.ok:
        return Result.failure(resp.kind, f"Error uploading {key}: {resp.message}")

    try:
        os.remove(staged_path)
    except OSError as e:
        return Result.failure(STAGING, f"Uploaded {key} but could not remove {staged_path}: {e}")
    return Result.success(key)


def transfer_asset(asset: Asset, config: MigrationConfig, theme_id: int) -> AssetOutcome:
    """
    Download ``asset`` from the source and upload it to ``theme_id``.

    Assets without a public URL are skipped without any I/O.  The upload
    only starts once the download has been staged.
    """
    if not asset.transferable:
        return AssetOutcome(asset.key, SKIPPED, "ASSET_SKIPPED")

    downloaded = download_asset(asset, config.staging_dir, timeout=config.request_timeout)
    if not downloaded.ok:
        return AssetOutcome(asset.key, FAILED, "ASSET_DOWNLOAD", downloaded.message)

    uploaded = upload_asset(
        config.destination_store_url,
        config.destination_store_token,
        theme_id,
        asset.key,
        downloaded.value,
        timeout=config.request_timeout,
    )
    if not uploaded.ok:
        orphan = downloaded.value if os.path.exists(downloaded.value) else None
        return AssetOutcome(asset.key, FAILED, "ASSET_UPLOAD", uploaded.message, staged_path=orphan)
    return AssetOutcome(asset.key, MIGRATED, "ASSET_MIGRATED")
