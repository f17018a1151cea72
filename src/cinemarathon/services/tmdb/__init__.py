"""TMDB catalog source."""

from .tmdb_client import TMDBCatalogSource

__all__ = ["TMDBCatalogSource"]
