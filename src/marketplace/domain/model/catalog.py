"""CatalogItem aggregate.

Catalog items live independently of carts and orders. They have their own
lifecycle: prices change, items are added and removed by vendors.
"""

from __future__ import annotations

from dataclasses import dataclass

from marketplace.domain.exceptions import ValidationError
from marketplace.domain.model.value_objects import EntityType, Money


@dataclass
class CatalogItem:
    """A menu item or product offered by one vendor.

    Ids are unique across restaurants, shops and pharmacies, so a cart
    can key its lines on the catalog id alone.
    """

    id: str
    name: str
    price: Money
    vendor_id: str
    vendor_name: str
    entity_type: EntityType
    description: str | None = None
    image_url: str | None = None

    def update_price(self, new_price: Money) -> None:
        """Change the catalog price.

        Existing orders are unaffected: they captured the price at
        creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Catalog price must be greater than zero")
        self.price = new_price
