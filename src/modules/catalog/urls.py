"""Catalog URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.catalog.views import CatalogViewSet

router = SimpleRouter(trailing_slash=True)
router.register("catalog", CatalogViewSet, basename="catalog")

urlpatterns = router.urls
