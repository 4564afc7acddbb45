class PersonalizerError(Exception):
    """Base class for order personalization errors"""


class CatalogUnavailable(PersonalizerError):
    """The shop catalog could not be read or written"""

    def __init__(self, shop_domain: str, reason: str):
        self.shop_domain = shop_domain
        self.reason = reason
        super().__init__(f"Catalog unavailable for {shop_domain}: {reason}")


class MalformedOrderPayload(PersonalizerError):
    """The order notification is missing required fields"""
