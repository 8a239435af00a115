import hashlib
import hmac
import secrets


class PasswordHasher:
    """
    基于 PBKDF2-HMAC-SHA256 的密码散列工具。
    散列格式: pbkdf2_sha256$<迭代次数>$<盐(hex)>$<散列(hex)>
    """

    ALGORITHM = "pbkdf2_sha256"
    ITERATIONS = 390_000

    @classmethod
    def hash(cls, password: str, iterations: int | None = None) -> str:
        rounds = iterations or cls.ITERATIONS
        salt = secrets.token_hex(16)
        digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), bytes.fromhex(salt), rounds)
        return f"{cls.ALGORITHM}${rounds}${salt}${digest.hex()}"

    @classmethod
    def verify(cls, password: str, encoded: str) -> bool:
        try:
            algorithm, rounds, salt, expected = encoded.split("$")
        except ValueError:
            return False
        if algorithm != cls.ALGORITHM:
            return False

        digest = hashlib.pbkdf2_hmac(
            "sha256", password.encode("utf-8"), bytes.fromhex(salt), int(rounds)
        )
        return hmac.compare_digest(digest.hex(), expected)
