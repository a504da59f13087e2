"""Configuration locale du module feedback."""

FEEDBACK_SORT_FIELDS = ["created_at", "rating", "product_name", "customer_name"]
FEEDBACK_DEFAULT_SORT = "created_at"

MIN_RATING = 1
MAX_RATING = 5
