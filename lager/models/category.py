"""Category model - product grouping with a URL-safe slug."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lager.models.base import Base


class Category(Base):
    """Product category.

    The slug is the external filter key and is unique across all categories.
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, slug='{self.slug}')>"
