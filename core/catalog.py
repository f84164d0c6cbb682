from types import MappingProxyType
from typing import Mapping, Tuple

from core.models import PriceLineItem

# Reference price list (EUR, excl. VAT). Order is the display order.
PRICE_CATALOG: Tuple[PriceLineItem, ...] = (
    PriceLineItem("panel", "Distribution board installation (apartment)", "pcs", 180.0),
    PriceLineItem("circuit", "Complete socket circuit", "circuit", 70.0),
    PriceLineItem("socket", "Socket replacement / addition", "pcs", 5.0),
    PriceLineItem("switch", "Switch (two-way, intermediate)", "pcs", 5.0),
    PriceLineItem("light", "Chandelier / light fixture mounting", "pcs", 20.0),
    PriceLineItem("hob", "Hob connection (3-phase)", "pcs", 45.0),
    PriceLineItem("service_hour", "Service - hourly rate", "hr", 30.0),
)

def index_catalog(catalog: Tuple[PriceLineItem, ...]) -> Mapping[str, PriceLineItem]:
    return MappingProxyType({item.key: item for item in catalog})

CATALOG_BY_KEY = index_catalog(PRICE_CATALOG)
