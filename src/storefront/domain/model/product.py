"""Product aggregate.

Products live independently of orders. Their price may change at any
time without affecting existing order lines, which keep the price they
were bought at. Stock is the single source of truth for availability
and is only ever changed by a relative adjustment issued to the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money

MIN_NAME_LENGTH = 2


@dataclass
class Product:
    """A product in the catalog.

    Use ``Product.create()`` for new products; ``__init__`` is kept
    plain so repositories can reconstitute stored records.
    """

    id: str | None
    name: str
    price: Money
    stock: int
    category: str
    description: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        name: str,
        price: Money,
        stock: int,
        category: str,
        description: str | None = None,
    ) -> Product:
        """Create a new catalog product, enforcing all invariants."""
        name = _require_name(name)
        category = _require_category(category)
        if not isinstance(stock, int) or isinstance(stock, bool):
            raise ValidationError(f"Stock must be an integer, got {stock!r}")
        if stock < 0:
            raise ValidationError(f"Stock cannot be negative, got {stock}")
        return Product(
            id=None,
            name=name,
            price=price,
            stock=stock,
            category=category,
            description=description.strip() if description else None,
        )

    def has_stock(self, quantity: int) -> bool:
        return self.stock >= quantity

    def rename(self, name: str) -> None:
        self.name = _require_name(name)

    def recategorize(self, category: str) -> None:
        self.category = _require_category(category)

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing order lines because they
        capture a price snapshot at order-creation time.
        """
        self.price = new_price


def _require_name(name: str) -> str:
    if not name or len(name.strip()) < MIN_NAME_LENGTH:
        raise ValidationError(
            f"Product name must be at least {MIN_NAME_LENGTH} characters"
        )
    return name.strip()


def _require_category(category: str) -> str:
    if not category or not category.strip():
        raise ValidationError("Product category is required")
    return category.strip()
