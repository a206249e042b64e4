"""
Webhook signature verification.
"""

import base64
import hashlib
import hmac
from typing import Optional, Protocol, Union

SIGNATURE_HEADER = "x-kontent-ai-signature"


class SignatureVerifier(Protocol):
    def is_valid(self, body: Union[str, bytes], signature: Optional[str]) -> bool: ...


class HmacSignatureVerifier:
    """Checks base64(HMAC-SHA256(secret, body)) against the signature header."""

    def __init__(self, secret: str):
        self.secret = secret.encode("utf-8")

    def sign(self, body: Union[str, bytes]) -> str:
        if isinstance(body, str):
            body = body.encode("utf-8")
        digest = hmac.new(self.secret, body, hashlib.sha256).digest()
        return base64.b64encode(digest).decode("ascii")

    def is_valid(self, body: Union[str, bytes], signature: Optional[str]) -> bool:
        if not signature:
            return False
        return hmac.compare_digest(self.sign(body).encode("ascii"), signature.strip().encode("utf-8"))
