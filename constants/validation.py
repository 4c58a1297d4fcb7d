"""
Validation Constants

Contains whitelist values for validating API input and ensuring
data integrity of cooking-plan requests.
"""

import re

# Valid stock item types
VALID_STOCK_ITEM_TYPES = {'ingredient', 'container'}

# Dates travel as YYYY-MM-DD
DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')

# Ids are UUID strings
UUID_PATTERN = re.compile(
    r'^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$'
)

# Headcount bounds for a single meal portion
MIN_HEADCOUNT = 1
MAX_HEADCOUNT = 100000

# Maximum number of menu selections accepted by the batch-details endpoint
MAX_BATCH_DETAILS = 200
