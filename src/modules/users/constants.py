"""User domain constants."""

from django.db import models


class Availability(models.TextChoices):
    AVAILABLE = "Available", "Available"
    BUSY = "Busy", "Busy"


# Query-string values accepted by the delivery-person filter
AVAILABILITY_FILTER_VALUES = {
    "available": Availability.AVAILABLE,
    "busy": Availability.BUSY,
}
