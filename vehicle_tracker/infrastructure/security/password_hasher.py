# vehicle_tracker/infrastructure/security/password_hasher.py
import base64
import hashlib
import hmac
import os


class PasswordHasher:
    """Salted PBKDF2 hashes stored as ``algo$iterations$salt$hash``."""

    DEFAULT_ALGO = "pbkdf2_sha256"
    DEFAULT_ITERATIONS = 600_000
    SALT_BYTES = 16

    @classmethod
    def hash_password(cls, password: str, *, iterations: int | None = None) -> str:
        if not password:
            raise ValueError("Password must not be empty.")

        it = iterations or cls.DEFAULT_ITERATIONS
        salt = os.urandom(cls.SALT_BYTES)
        dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, it)

        salt_b64 = base64.b64encode(salt).decode("utf-8")
        hash_b64 = base64.b64encode(dk).decode("utf-8")
        return f"{cls.DEFAULT_ALGO}${it}${salt_b64}${hash_b64}"

    @classmethod
    def verify_password(cls, password: str, encoded: str) -> bool:
        try:
            algo, iterations, salt_b64, hash_b64 = encoded.split("$", 3)
            salt = base64.b64decode(salt_b64.encode("utf-8"))
            expected = base64.b64decode(hash_b64.encode("utf-8"))
            it = int(iterations)
        except (ValueError, AttributeError):
            return False

        if algo != cls.DEFAULT_ALGO:
            return False

        dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, it)
        return hmac.compare_digest(dk, expected)
