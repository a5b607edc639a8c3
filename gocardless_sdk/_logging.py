import hashlib
import logging

# Create the library logger
logger = logging.getLogger("gocardless_sdk")

# Add NullHandler to prevent "No handlers could be found" warnings
# if the application doesn't configure logging.
logger.addHandler(logging.NullHandler())


def redact(identity: str | None) -> str:
    """
    Redacts a resource identity for logging.
    Hashes the value so log lines can be correlated without exposing the ID.
    """
    if identity is None:
        return "<none>"
    try:
        return hashlib.sha256(str(identity).encode("utf-8")).hexdigest()[:8]
    except Exception:
        return "<redaction_failed>"
