"""Zone URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.zones.views import ZoneViewSet

router = SimpleRouter(trailing_slash=True)
router.register("zones", ZoneViewSet, basename="zone")

urlpatterns = router.urls
