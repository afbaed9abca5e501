"""Dashboard URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.dashboard.views import DashboardViewSet

router = SimpleRouter(trailing_slash=True)
router.register("dashboard", DashboardViewSet, basename="dashboard")

urlpatterns = router.urls
