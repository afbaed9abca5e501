"""Collection names and role values used by the mobile apps' database."""

ORDERS_COLLECTION = "Commande"
USERS_COLLECTION = "users"
PRODUCTS_COLLECTION = "Product"
CATEGORIES_COLLECTION = "category"
TYPES_COLLECTION = "type"
PROMOTIONS_COLLECTION = "Promotion"
ZONES_COLLECTION = "Zone"

CLIENT_ROLE = "Client"
DELIVERY_PERSON_ROLE = "Delivery_Man"
