"""Product model - one stock-keeping entry identified by its barcode."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lager.models.base import Base


class Product(Base):
    """Product with barcode, quantity and an optional category.

    The barcode is the business key. `category_id` is a weak reference:
    nothing guarantees the category still exists.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    barcode: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    # URL or inline data URL
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    category_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, barcode='{self.barcode}')>"
