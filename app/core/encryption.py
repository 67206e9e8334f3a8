import base64
import hashlib

from Crypto.Cipher import AES
from Crypto.Random import get_random_bytes

from app.core.config import settings


class Encryptor:
    """
    Symmetric encryption for values that leave the server and come back
    (e.g. the hosted response nonce).

    AES-256-GCM, key derived from SECRET_KEY. Output is
    base64url(nonce || tag || ciphertext).
    """

    NONCE_SIZE = 12
    TAG_SIZE = 16

    def __init__(self, secret_key: str | None = None):
        secret = secret_key if secret_key is not None else settings.SECRET_KEY
        if not secret:
            raise ValueError("SECRET_KEY not configured")
        self._key = hashlib.sha256(secret.encode("utf-8")).digest()

    def encrypt(self, plaintext: str) -> str:
        nonce = get_random_bytes(self.NONCE_SIZE)
        cipher = AES.new(self._key, AES.MODE_GCM, nonce=nonce)
        ciphertext, tag = cipher.encrypt_and_digest(plaintext.encode("utf-8"))
        return base64.urlsafe_b64encode(nonce + tag + ciphertext).decode("utf-8")

    def decrypt(self, token: str) -> str:
        raw = base64.urlsafe_b64decode(token.encode("utf-8"))
        if len(raw) <= self.NONCE_SIZE + self.TAG_SIZE:
            raise ValueError("Encrypted value is too short")

        nonce = raw[: self.NONCE_SIZE]
        tag = raw[self.NONCE_SIZE : self.NONCE_SIZE + self.TAG_SIZE]
        ciphertext = raw[self.NONCE_SIZE + self.TAG_SIZE :]

        cipher = AES.new(self._key, AES.MODE_GCM, nonce=nonce)
        # raises ValueError on tampered input
        return cipher.decrypt_and_verify(ciphertext, tag).decode("utf-8")
