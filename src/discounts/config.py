"""Configuration locale du module discounts."""

DISCOUNT_TYPE_PERCENTAGE = "Percentage"
DISCOUNT_TYPE_FIXED_AMOUNT = "FixedAmount"
ALLOWED_DISCOUNT_TYPES = [DISCOUNT_TYPE_PERCENTAGE, DISCOUNT_TYPE_FIXED_AMOUNT]

DISCOUNT_STATUS_ACTIVE = "Active"
DISCOUNT_STATUS_INACTIVE = "Inactive"
ALLOWED_DISCOUNT_STATUS = [DISCOUNT_STATUS_ACTIVE, DISCOUNT_STATUS_INACTIVE]

MAX_PERCENTAGE = 100

DISCOUNT_SORT_FIELDS = [
    "id", "name", "code", "type", "value", "status",
    "start_date", "end_date", "product_name", "variant_sku",
]
DISCOUNT_DEFAULT_SORT = "id"
