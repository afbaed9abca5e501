"""Promotion code constants."""

import string

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_SUFFIX_LENGTH = 5
CODE_PREFIX_LENGTH = 2

# Used as the prefix when the description is blank
PLACEHOLDER_PREFIX = "PR"

PROMOTION_CODE_MAX_RETRIES = 5
