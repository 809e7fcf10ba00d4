import secrets
import time


def generate_id(prefix: str = "") -> str:
    """
    Build a record identifier: ``prefix`` + epoch milliseconds + 64 random bits.

    The random part is zero-padded to a fixed width so identifiers stay
    digits-only after the prefix.
    """
    millis = int(time.time() * 1000)
    return f"{prefix}{millis}{secrets.randbits(64):020d}"
