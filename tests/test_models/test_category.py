"""Tests for Category model."""

from lager.models import Category


def test_category_tablename():
    """Category should map to categories table."""
    assert Category.__tablename__ == "categories"


def test_category_has_required_columns():
    columns = {c.name for c in Category.__table__.columns}
    assert columns == {"id", "name", "slug"}


def test_category_slug_unique():
    """Slug is the external filter key and must be unique."""
    assert Category.__table__.c.slug.unique is True
    assert Category.__table__.c.slug.nullable is False
