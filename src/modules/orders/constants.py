"""Order domain constants.

Delivery status values and the labels shown when a referenced record
cannot be resolved.
"""

from django.db import models


class DeliveryStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    DELIVERING = "Delivering", "Delivering"
    DELIVERED = "Delivered", "Delivered"


UNKNOWN_CUSTOMER = "Unknown User"
UNKNOWN_DELIVERY_PERSON = "Unknown Delivery Person"
UNKNOWN_PRODUCT = "Unknown Product"
UNNAMED_PRODUCT = "Unnamed Product"
PLACEHOLDER_PHOTO = "/placeholder-avatar.png"
NO_ADDRESS = "No Address"
UNKNOWN_ADDRESS_TITLE = "Unknown Title"

# A line item without a quantity counts as one unit
DEFAULT_LINE_QUANTITY = 1
