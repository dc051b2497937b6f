import urllib.parse
from typing import Sequence

from bonusplan.schemas.catalog import Product

SHOPPING_LIST_URL = "https://www.ah.nl/mijnlijst/add-multiple"


def _format_quantity(quantity: float) -> str:
    """2.0 -> '2', 1.5 -> '1.5'."""
    if float(quantity).is_integer():
        return str(int(quantity))
    return repr(float(quantity))


def build_shopping_list_reference(
    ingredients: Sequence[Product], base_url: str = SHOPPING_LIST_URL
) -> str:
    """URL that adds every product to the online shopping list, one ``p=id:qty`` each."""
    if not ingredients:
        return base_url
    query = urllib.parse.urlencode(
        [("p", f"{p.id}:{_format_quantity(p.quantity)}") for p in ingredients]
    )
    return f"{base_url}?{query}"
