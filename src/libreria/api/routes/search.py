from __future__ import annotations

import logging

from fastapi import APIRouter, Query

from libreria.clients import google_books
from libreria.schemas.book import CatalogBook, SearchResponse


logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=SearchResponse)
async def search(q: str = Query("")) -> SearchResponse:
    if not q.strip():
        return SearchResponse(results=[], total=0)

    items = await google_books.search_volumes(q)
    results = []
    for item in items:
        summary = google_books.to_book_summary(item)
        if not summary["id"]:
            logger.warning(f"Skipping catalog item without id for query '{q}'")
            continue
        results.append(CatalogBook(**summary))
    return SearchResponse(results=results, total=len(results))
