"""User URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.users.views import CustomerViewSet, DeliveryPersonViewSet

router = SimpleRouter(trailing_slash=True)
router.register("customers", CustomerViewSet, basename="customer")
router.register("delivery-people", DeliveryPersonViewSet, basename="delivery-person")

urlpatterns = router.urls
