from libreria.api.routes.auth import router as auth_router
from libreria.api.routes.books import router as books_router
from libreria.api.routes.favorites import router as favorites_router
from libreria.api.routes.reviews import router as reviews_router
from libreria.api.routes.search import router as search_router

__all__ = ["auth_router", "books_router", "favorites_router", "reviews_router", "search_router"]
