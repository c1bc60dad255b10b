"""Pull website records from an upstream admin backend."""

import logging

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)


class SyncError(Exception):
    """The upstream backend could not be reached or returned garbage."""


def mask_key(key: str | None) -> str:
    return "***" + key[-4:] if key else "missing"


async def fetch_remote_websites(api_base_url: str, backend_api_key: str) -> list[dict]:
    url = f"{api_base_url.rstrip('/')}/api/websites"
    try:
        async with httpx.AsyncClient(timeout=settings.SYNC_TIMEOUT_SECONDS) as client:
            resp = await client.get(url, headers={"Authorization": f"Bearer {backend_api_key}"})
            resp.raise_for_status()
            data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Website sync from %s failed (key %s): %s", url, mask_key(backend_api_key), e)
        raise SyncError(f"Failed to fetch websites: {e}") from e

    items = data.get("items") if isinstance(data, dict) else None
    return [item for item in items or [] if isinstance(item, dict)]


# upstream records use the widget's camelCase field names
REMOTE_FIELDS = {
    "id": "id",
    "websiteName": "website_name",
    "websiteUrl": "website_url",
    "systemPrompt": "system_prompt",
    "customPrompt": "custom_prompt",
    "category": "category",
    "urls": "urls",
    "library": "library",
    "apiKey": "api_key",
    "status": "status",
}


def to_website_fields(item: dict) -> dict:
    """Map one upstream record onto Website field names.

    Snake_case keys are accepted as well so a sync between two instances of
    this service works too.
    """
    fields = {}
    for remote, local in REMOTE_FIELDS.items():
        if remote in item:
            fields[local] = item[remote]
        elif local in item:
            fields[local] = item[local]
    return fields
