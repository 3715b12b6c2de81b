"""Tests for product input schemas."""

import pytest
from pydantic import ValidationError

from product_catalog.products import Gender, PaginationParams, ProductCreate, ProductUpdate


class TestProductCreate:
    """Tests for ProductCreate."""

    def test_defaults(self) -> None:
        """Only title should be required."""
        data = ProductCreate(title="Hat")
        assert data.images == []
        assert data.slug is None
        assert data.gender == Gender.UNISEX
        assert data.price == 0

    def test_rejects_empty_title(self) -> None:
        with pytest.raises(ValidationError):
            ProductCreate(title="")

    def test_rejects_negative_price(self) -> None:
        with pytest.raises(ValidationError):
            ProductCreate(title="Hat", price=-1)

    def test_rejects_unknown_gender(self) -> None:
        with pytest.raises(ValidationError):
            ProductCreate(title="Hat", gender="robot")

    @pytest.mark.parametrize("title", ["   ", "''", " ?#/ "])
    def test_rejects_title_without_slug_characters(self, title: str) -> None:
        """A title that normalizes to an empty slug should be rejected."""
        with pytest.raises(ValidationError):
            ProductCreate(title=title)

    def test_rejects_blank_slug(self) -> None:
        with pytest.raises(ValidationError):
            ProductCreate(title="Hat", slug="  ' ")

    def test_rejects_blank_title_with_slug(self) -> None:
        with pytest.raises(ValidationError):
            ProductCreate(title="   ", slug="hat")

    def test_explicit_slug_rescues_symbol_title(self) -> None:
        data = ProductCreate(title="???", slug="mystery_box")
        assert data.slug == "mystery_box"


class TestProductUpdate:
    """Tests for ProductUpdate.changes."""

    def test_images_absent(self) -> None:
        """Missing images key should mean no replacement."""
        fields, images = ProductUpdate(title="Cap").changes()
        assert fields == {"title": "Cap"}
        assert images is None

    def test_images_empty_list(self) -> None:
        """Empty list should still request replacement."""
        fields, images = ProductUpdate(images=[]).changes()
        assert fields == {}
        assert images == []

    def test_null_images_means_untouched(self) -> None:
        fields, images = ProductUpdate.model_validate({"images": None}).changes()
        assert fields == {}
        assert images is None

    def test_gender_serialized_as_value(self) -> None:
        fields, _ = ProductUpdate(gender="kid").changes()
        assert fields == {"gender": "kid"}

    def test_null_description_allowed(self) -> None:
        fields, _ = ProductUpdate.model_validate({"description": None}).changes()
        assert fields == {"description": None}

    @pytest.mark.parametrize("field", ["title", "slug", "price", "stock", "sizes", "gender", "tags"])
    def test_null_required_field_rejected(self, field: str) -> None:
        with pytest.raises(ValidationError):
            ProductUpdate.model_validate({field: None})

    @pytest.mark.parametrize("payload", [{"title": "   "}, {"slug": "  "}, {"slug": "''"}, {"slug": "/?#"}])
    def test_blank_identifier_rejected(self, payload: dict) -> None:
        with pytest.raises(ValidationError):
            ProductUpdate.model_validate(payload)


class TestPaginationParams:
    """Tests for PaginationParams."""

    def test_defaults(self) -> None:
        params = PaginationParams()
        assert params.limit == 10
        assert params.offset == 0

    def test_rejects_negative_offset(self) -> None:
        with pytest.raises(ValidationError):
            PaginationParams(offset=-1)

    def test_rejects_zero_limit(self) -> None:
        with pytest.raises(ValidationError):
            PaginationParams(limit=0)
