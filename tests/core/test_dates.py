"""Tests unitaires des dates UTC stockées sans fuseau."""
from datetime import datetime, timedelta, timezone

from src.core.dates import utc_now
from src.products.models import Product


def test_utc_now_is_naive_utc():
    now = utc_now()
    assert now.tzinfo is None
    assert abs(datetime.now(timezone.utc).replace(tzinfo=None) - now) < timedelta(seconds=5)

def test_model_timestamps_default_to_utc_now():
    product = Product(name="Casquette", category_id=1)
    assert product.created_at.tzinfo is None
    assert abs(utc_now() - product.created_at) < timedelta(seconds=5)
