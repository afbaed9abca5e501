"""Promotion URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.promotions.views import PromotionViewSet

router = SimpleRouter(trailing_slash=True)
router.register("promotions", PromotionViewSet, basename="promotion")

urlpatterns = router.urls
