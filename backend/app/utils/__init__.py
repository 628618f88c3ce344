from app.utils.hashing import body_sha256, delivery_id
from app.utils.validators import validate_email, clean_text, parse_amount

__all__ = [
    "body_sha256", "delivery_id",
    "validate_email", "clean_text", "parse_amount",
]
