"""
Hashing Utilities — SHA-256 digests for correlating webhook deliveries in logs.
"""
import hashlib


def body_sha256(data: bytes) -> str:
    return hashlib.sha256(data or b"").hexdigest()


def delivery_id(raw_body: bytes) -> str:
    """Short, stable id for a webhook delivery: first 16 hex chars of its SHA-256.
    Identical redeliveries share an id, which makes replays easy to spot.
    """
    return body_sha256(raw_body)[:16]
