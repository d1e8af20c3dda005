"""Signed upload-URL issuance for object storage.

The server never sees file bytes: it hands out a one-shot URL under the
configured storage base, and the client PUTs the file there directly.
Each URL names a fresh object id and carries an expiry and an HMAC-SHA256
signature over ``<object path>:<expiry>`` so the storage gateway can
reject forged or stale uploads.
"""

import hashlib
import hmac
import logging
import time
import uuid
from urllib.parse import urlencode

logger = logging.getLogger(__name__)


class UploadTargetIssuer:
    """Issues signed PUT URLs for new attachment objects.

    Args:
        base_url: storage root, e.g. ``https://storage.example.com/bucket``
        secret: HMAC key shared with the storage gateway
        ttl_seconds: how long an issued URL stays valid
    """

    def __init__(self, base_url: str, secret: str, *, ttl_seconds: int = 900) -> None:
        self._base_url = base_url.rstrip("/")
        self._secret = secret.encode("utf-8")
        self._ttl = ttl_seconds

    def sign(self, object_path: str, expires: int) -> str:
        message = f"{object_path}:{expires}".encode("utf-8")
        return hmac.new(self._secret, message, hashlib.sha256).hexdigest()

    def verify(self, object_path: str, expires: int, signature: str, *, now: float | None = None) -> bool:
        """Check a signature the way the storage gateway does."""
        if (now if now is not None else time.time()) > expires:
            return False
        return hmac.compare_digest(self.sign(object_path, expires), signature)

    def issue(self, *, now: float | None = None) -> str:
        """Return a new signed upload URL."""
        object_path = f"uploads/{uuid.uuid4()}"
        expires = int(now if now is not None else time.time()) + self._ttl
        query = urlencode({"expires": expires, "signature": self.sign(object_path, expires)})
        logger.debug("Issued upload target for %s", object_path)
        return f"{self._base_url}/{object_path}?{query}"
