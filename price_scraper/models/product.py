# price_scraper/models/product.py

"""Product data model for inter-module data flow."""

from dataclasses import dataclass
from urllib.parse import urlparse

PRICE_NOT_AVAILABLE = "Price not available"
NAME_NOT_AVAILABLE = "Product name not available"


@dataclass(frozen=True)
class Product:
    """A single retailer product page reduced to name, price and currency."""

    product_name: str
    price: str
    currency: str
    link: str

    @classmethod
    def empty(cls) -> "Product":
        """Return the placeholder for a page that yielded nothing usable."""
        return cls(product_name="", price="", currency="", link="")

    @property
    def is_empty(self) -> bool:
        """True when the product has no name and must be discarded."""
        return not self.product_name

    @property
    def retailer(self) -> str:
        """Host of the product link without a leading ``www.``."""
        host = urlparse(self.link).netloc.lower()
        return host.removeprefix("www.")

    @property
    def has_price(self) -> bool:
        """True when a real price token was extracted."""
        return bool(self.price) and self.price != PRICE_NOT_AVAILABLE

    def to_dict(self) -> dict[str, str]:
        """Serialise using the public wire keys."""
        return {
            "productName": self.product_name,
            "price": self.price,
            "currency": self.currency,
            "link": self.link,
        }
