"""Product draft that flows through the resolution workflow."""

from dataclasses import dataclass, replace

from lager.core.errors import DraftValidationError
from lager.schemas.lookup import LookupResult
from lager.schemas.product import ProductCreate, ProductPatch, ProductRead


@dataclass(frozen=True)
class ProductDraft:
    """Immutable, unsaved product state being edited.

    Each edit returns a new draft. Original draft is never mutated.
    """

    name: str = ""
    barcode: str = ""
    image: str | None = None
    quantity: int = 1
    category_id: int | None = None

    @classmethod
    def from_product(cls, product: ProductRead) -> "ProductDraft":
        """Pre-populate a draft from a persisted product."""
        return cls(
            name=product.name,
            barcode=product.barcode,
            image=product.image,
            quantity=product.quantity,
            category_id=product.category_id,
        )

    def with_barcode(self, barcode: str) -> "ProductDraft":
        return replace(self, barcode=barcode)

    def with_name(self, name: str) -> "ProductDraft":
        return replace(self, name=name)

    def with_image(self, image: str | None) -> "ProductDraft":
        return replace(self, image=image)

    def with_category(self, category_id: int | None) -> "ProductDraft":
        return replace(self, category_id=category_id)

    def with_quantity(self, quantity: int) -> "ProductDraft":
        return replace(self, quantity=max(0, quantity))

    def increment(self) -> "ProductDraft":
        return self.with_quantity(self.quantity + 1)

    def decrement(self) -> "ProductDraft":
        """Step quantity down, clamped at zero."""
        return self.with_quantity(self.quantity - 1)

    def with_lookup(self, result: LookupResult) -> "ProductDraft":
        """Merge a lookup result.

        The name is overwritten when the lookup found one; the image only
        comes along with a name. Without a name the draft is unchanged.
        """
        if not result.name:
            return self
        if result.image:
            return replace(self, name=result.name, image=result.image)
        return replace(self, name=result.name)

    def validate(self) -> None:
        """Check the fields required for persistence.

        Raises:
            DraftValidationError: On empty barcode or name
        """
        if not self.barcode.strip():
            raise DraftValidationError("barcode", key="barcodeRequired")
        if not self.name.strip():
            raise DraftValidationError("name", key="nameRequired")

    def to_create(self) -> ProductCreate:
        return ProductCreate(
            name=self.name,
            barcode=self.barcode,
            image=self.image,
            quantity=self.quantity,
            category_id=self.category_id,
        )

    def to_patch(self) -> ProductPatch:
        return ProductPatch(
            name=self.name,
            barcode=self.barcode,
            image=self.image,
            quantity=self.quantity,
            category_id=self.category_id,
        )
