# Security module
from hotel_booking.security.auth import (
    get_password_hash, verify_password, create_access_token,
    get_current_user, require_role, require_customer, require_owner
)

__all__ = [
    'get_password_hash', 'verify_password', 'create_access_token',
    'get_current_user', 'require_role', 'require_customer', 'require_owner'
]
