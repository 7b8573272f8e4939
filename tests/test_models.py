# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the product schemas to ensure:
# - Valid data is accepted and normalized
# - Invalid data raises ValidationError
# - Partial updates only report the fields that were sent
# - List filters match stored records correctly
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from app.config import settings
from core.models import (
    ProductCategory,
    ProductCreate,
    ProductQuery,
    ProductReplace,
    ProductUpdate,
)


def make_record(**overrides):
    """Stored-record shaped dict for ProductQuery.matches tests."""
    record = {
        "id": 1,
        "name": "Mechanical Keyboard",
        "description": "Tenkeyless board",
        "price": 89.99,
        "category": "electronics",
        "in_stock": True,
        "tags": ["keyboard", "usb-c"],
    }
    record.update(overrides)
    return record


# =============================================================================
# ProductCreate Tests
# =============================================================================

class TestProductCreate:
    """Tests for ProductCreate validation."""

    def test_valid_product(self):
        """Test creating a valid product with every field."""
        product = ProductCreate(
            name="Desk Lamp",
            description="Warm light",
            price=24.5,
            category="home",
            in_stock=False,
            tags=["lighting"],
        )

        assert product.name == "Desk Lamp"
        assert product.category == ProductCategory.HOME
        assert product.in_stock is False
        assert product.tags == ["lighting"]

    def test_defaults(self):
        """Only name and price are required."""
        product = ProductCreate(name="Widget", price=1)

        assert product.description is None
        assert product.category == ProductCategory.OTHER
        assert product.in_stock is True
        assert product.tags == []

    def test_name_is_stripped(self):
        product = ProductCreate(name="  Widget  ", price=1)
        assert product.name == "Widget"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ProductCreate(name="   ", price=1)
        assert "name must not be blank" in str(exc_info.value)

    def test_missing_required_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            ProductCreate()
        missing = {error["loc"][0] for error in exc_info.value.errors()}
        assert missing == {"name", "price"}

    @pytest.mark.parametrize("price", [0, -1, 1_000_001])
    def test_price_out_of_range(self, price):
        with pytest.raises(ValidationError):
            ProductCreate(name="Widget", price=price)

    def test_price_rounded_to_cents(self):
        product = ProductCreate(name="Widget", price=9.999)
        assert product.price == 10.0

    @pytest.mark.parametrize("price", [0.004, 0.001])
    def test_price_that_rounds_to_zero_rejected(self, price):
        with pytest.raises(ValidationError) as exc_info:
            ProductCreate(name="Widget", price=price)
        assert "price must be at least 0.01" in str(exc_info.value)

    def test_half_cent_rounds_up_to_one_cent(self):
        assert ProductCreate(name="Widget", price=0.006).price == 0.01

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            ProductCreate(name="Widget", price=1, category="groceries")

    def test_tags_normalized_and_deduplicated(self):
        product = ProductCreate(name="Widget", price=1, tags=[" USB-C ", "usb-c", "Hub"])
        assert product.tags == ["usb-c", "hub"]

    def test_too_many_tags(self):
        with pytest.raises(ValidationError) as exc_info:
            ProductCreate(name="Widget", price=1, tags=[f"t{i}" for i in range(11)])
        assert "at most 10 unique tags" in str(exc_info.value)

    def test_tag_limit_counts_unique_tags(self):
        tags = ["a"] * 11 + [f"T{i}" for i in range(9)] + [f"t{i}" for i in range(9)]
        product = ProductCreate(name="Widget", price=1, tags=tags)
        assert product.tags == ["a"] + [f"t{i}" for i in range(9)]

    def test_blank_tag_rejected(self):
        with pytest.raises(ValidationError):
            ProductCreate(name="Widget", price=1, tags=["ok", "  "])

    def test_json_dump_uses_plain_values(self):
        """Stored records hold enum values as strings."""
        data = ProductCreate(name="Widget", price=1, category="toys").model_dump(mode="json")
        assert data["category"] == "toys"


class TestProductReplace:
    """PUT bodies follow the same rules as POST bodies."""

    def test_requires_name_and_price(self):
        with pytest.raises(ValidationError):
            ProductReplace(name="Widget")


# =============================================================================
# ProductUpdate Tests
# =============================================================================

class TestProductUpdate:
    """Tests for partial updates."""

    def test_changes_only_contains_sent_fields(self):
        update = ProductUpdate(price=12.341)
        assert update.changes() == {"price": 12.34}

    def test_empty_update(self):
        assert ProductUpdate().changes() == {}

    def test_null_description_allowed(self):
        update = ProductUpdate.model_validate({"description": None})
        assert update.changes() == {"description": None}

    @pytest.mark.parametrize("field", ["name", "price", "category", "in_stock", "tags"])
    def test_null_rejected_for_required_fields(self, field):
        with pytest.raises(ValidationError) as exc_info:
            ProductUpdate.model_validate({field: None})
        assert f"{field} cannot be null" in str(exc_info.value)

    def test_category_serialized_as_value(self):
        update = ProductUpdate(category="books")
        assert update.changes() == {"category": "books"}

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            ProductUpdate(name="  ")

    def test_price_that_rounds_to_zero_rejected(self):
        with pytest.raises(ValidationError):
            ProductUpdate(price=0.004)

    def test_duplicate_tags_do_not_count_toward_limit(self):
        update = ProductUpdate(tags=["Sale"] * 12)
        assert update.changes() == {"tags": ["sale"]}

    def test_too_many_unique_tags(self):
        with pytest.raises(ValidationError):
            ProductUpdate(tags=[f"t{i}" for i in range(11)])


# =============================================================================
# ProductQuery Tests
# =============================================================================

class TestProductQuery:
    """Tests for list filters."""

    def test_defaults_match_everything(self):
        assert ProductQuery().matches(make_record())

    def test_price_range_must_be_ordered(self):
        with pytest.raises(ValidationError) as exc_info:
            ProductQuery(min_price=50, max_price=10)
        assert "min_price must be less than or equal to max_price" in str(exc_info.value)

    def test_limit_capped_by_max_page_size(self):
        assert ProductQuery(limit=settings.MAX_PAGE_SIZE).limit == settings.MAX_PAGE_SIZE
        with pytest.raises(ValidationError):
            ProductQuery(limit=settings.MAX_PAGE_SIZE + 1)

    def test_equal_bounds_allowed(self):
        query = ProductQuery(min_price=89.99, max_price=89.99)
        assert query.matches(make_record())

    def test_search_is_case_insensitive_and_covers_description(self):
        assert ProductQuery(q="KEYBOARD").matches(make_record())
        assert ProductQuery(q="tenkeyless").matches(make_record())
        assert not ProductQuery(q="mouse").matches(make_record())

    def test_search_with_null_description(self):
        assert not ProductQuery(q="board").matches(make_record(name="Lamp", description=None))

    def test_category_filter(self):
        assert ProductQuery(category="electronics").matches(make_record())
        assert not ProductQuery(category="books").matches(make_record())

    def test_in_stock_filter(self):
        assert not ProductQuery(in_stock=False).matches(make_record())
        assert ProductQuery(in_stock=False).matches(make_record(in_stock=False))

    def test_price_filters(self):
        assert not ProductQuery(min_price=90).matches(make_record())
        assert not ProductQuery(max_price=50).matches(make_record())
        assert ProductQuery(min_price=50, max_price=90).matches(make_record())

    def test_tag_filter_is_case_insensitive(self):
        assert ProductQuery(tag="USB-C").matches(make_record())
        assert not ProductQuery(tag="mouse").matches(make_record())
