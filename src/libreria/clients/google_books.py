"""
Async client for the Google Books API, the catalog Libreria searches and
treats as the source of truth for titles, authors, descriptions and covers.
"""

import httpx
from libreria.core.config import settings
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

def _params(**extra: Any) -> Dict[str, Any]:
    params = dict(extra)
    if settings.GOOGLE_BOOKS_API_KEY:
        params["key"] = settings.GOOGLE_BOOKS_API_KEY
    return params

def _client(client: Optional[httpx.AsyncClient]) -> httpx.AsyncClient:
    return client or httpx.AsyncClient(timeout=settings.GOOGLE_BOOKS_TIMEOUT)

async def search_volumes(
    query: str,
    max_results: Optional[int] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> List[Dict[str, Any]]:
    """
    Searches the catalog by free text.

    Args:
        query (str): Search terms (keywords, title, author...).
        max_results (int, optional): Maximum results, SEARCH_MAX_RESULTS by default.
        client (httpx.AsyncClient, optional): Client to reuse; a short-lived one is opened otherwise.

    Returns:
        List[Dict[str, Any]]: Raw volume items. Empty on any HTTP or network error.
    """
    params = _params(q=query, maxResults=max_results or settings.SEARCH_MAX_RESULTS)
    http = _client(client)
    try:
        response = await http.get(settings.GOOGLE_BOOKS_API_URL, params=params)
        response.raise_for_status()
        data = response.json()
        items = data.get("items") or []
        logger.info(f"Google Books search for '{query}' returned {len(items)} results.")
        return items
    except httpx.RequestError as exc:
        logger.error(f"Request to Google Books failed: {exc}")
        return []
    except httpx.HTTPStatusError as exc:
        logger.error(f"Google Books HTTP error: {exc.response.status_code} - {exc.response.text}")
        return []
    except ValueError as exc:
        logger.error(f"Google Books returned an unreadable body: {exc}")
        return []
    finally:
        if client is None:
            await http.aclose()

async def get_volume(volume_id: str, client: Optional[httpx.AsyncClient] = None) -> Optional[Dict[str, Any]]:
    """
    Fetches one volume by catalog id.

    Returns:
        Optional[Dict[str, Any]]: The volume, or None when it cannot be fetched.
    """
    url = f"{settings.GOOGLE_BOOKS_API_URL.rstrip('/')}/{volume_id}"
    http = _client(client)
    try:
        response = await http.get(url, params=_params())
        response.raise_for_status()
        return response.json()
    except httpx.RequestError as exc:
        logger.error(f"Request to Google Books failed for volume {volume_id}: {exc}")
        return None
    except httpx.HTTPStatusError as exc:
        logger.error(f"Google Books HTTP error for volume {volume_id}: {exc.response.status_code}")
        return None
    except ValueError as exc:
        logger.error(f"Google Books returned an unreadable body for volume {volume_id}: {exc}")
        return None
    finally:
        if client is None:
            await http.aclose()

def pick_thumbnail(volume_info: Optional[Dict[str, Any]]) -> Optional[str]:
    image_links = (volume_info or {}).get("imageLinks") or {}
    return image_links.get("thumbnail") or image_links.get("smallThumbnail")

def to_book_summary(volume: Dict[str, Any]) -> Dict[str, Any]:
    """Maps a raw volume to {id, title, authors, description, thumbnail}."""
    volume_info: Dict[str, Any] = volume.get("volumeInfo") or {}
    return {
        "id": volume.get("id"),
        "title": volume_info.get("title"),
        "authors": volume_info.get("authors") or [],
        "description": volume_info.get("description") or "",
        "thumbnail": pick_thumbnail(volume_info),
    }
