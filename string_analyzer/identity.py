import hashlib


def assign_identifier(text: str) -> str:
    """Compute the SHA-256 hex digest used as a string's public id"""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
