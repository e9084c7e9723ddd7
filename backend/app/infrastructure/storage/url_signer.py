"""HMAC signing of time-limited document download links."""

import hashlib
import hmac
import time


class UrlSigner:
    """Signs ``(document_ref, expires)`` pairs with a shared secret."""

    def __init__(self, secret: str):
        self._key = secret.encode("utf-8")

    def sign(self, document_ref: str, expires: int) -> str:
        message = f"{document_ref}:{expires}".encode("utf-8")
        return hmac.new(self._key, message, hashlib.sha256).hexdigest()

    def verify(
        self,
        document_ref: str,
        expires: int,
        signature: str,
        now: float | None = None,
    ) -> bool:
        """True if the signature matches and ``expires`` is still in the future."""
        current = time.time() if now is None else now
        if expires <= current:
            return False
        return hmac.compare_digest(self.sign(document_ref, expires), signature)
