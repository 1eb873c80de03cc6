"""
Preview & Test step: try a configuration before publishing it.

``calculate_test_price`` is the simplified pricing used for operator testing.
It looks up the area's tier or range price of the service and applies the
frequency multiplier. Add-ons and RUT are not applied.
"""

import math
from typing import Any, Dict, List, Optional

from calcbuilder.formbuilder.configuration import FormConfiguration

PRICING_MODELS = {
    "per_sqm_tiered": "tiers",
    "flat_range": "ranges",
}


def _find(items: List[Dict[str, Any]], key: Optional[str]) -> Optional[Dict[str, Any]]:
    return next((item for item in items if key and item.get("key") == key), None)


def zip_accepted(config: FormConfiguration, zip_code: str) -> bool:
    """An empty ZIP list accepts every code."""
    if not config.zip_areas:
        return True
    return zip_code.strip() in config.zip_areas


def calculate_test_price(
    config: FormConfiguration,
    service_key: Optional[str],
    area: float,
    frequency_key: Optional[str] = None,
) -> int:
    price = 0
    service = _find(config.services, service_key)
    if service is not None:
        bands_key = PRICING_MODELS.get(service.get("pricingModel"))
        bands = (service.get("pricingConfig") or {}).get(bands_key, []) if bands_key else []
        band = next(
            (b for b in bands if b.get("minArea", 0) <= area <= b.get("maxArea", 0)),
            None,
        )
        price = (band or {}).get("price") or 0

    frequency = _find(config.frequency_multipliers, frequency_key)
    if frequency is not None:
        # Half rounds up
        price = math.floor(price * frequency.get("multiplier", 1) + 0.5)
    return int(price)


def preview_fields(config: FormConfiguration) -> List[Dict[str, str]]:
    """Booking form fields in display order: the ordered built-ins, then placed fields."""
    fields = [
        {"key": key, "label": config.field_labels.get(key, key)}
        for key in config.field_order
    ]
    fields.extend({"key": f.id, "label": f.label} for f in config.fields)
    return fields
