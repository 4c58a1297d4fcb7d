# Utility modules for the cooking-plan service
from .validation import (
    PayloadError, safe_float, safe_int, is_valid_id, parse_iso_date,
    parse_meal_portions_payload, parse_order_quantities_payload,
    parse_additional_item_payload, parse_batch_details_payload
)
