"""UUID generation and validation utilities."""

import re
import uuid

UUID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$',
    re.IGNORECASE
)

def generate_uuid() -> str:
    """Generate a new UUID.
    
    Returns:
        String representation of UUID4
    """
    return str(uuid.uuid4())

def is_valid_uuid(value) -> bool:
    """Check that a value is a UUID in canonical 8-4-4-4-12 form.
    
    Records written by older demo builds used ids like "demo-1"; those
    fail this check and are treated as corrupted.
    """
    if not isinstance(value, str):
        return False
    return bool(UUID_PATTERN.match(value))
