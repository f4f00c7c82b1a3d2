"""Password hashing, opaque session tokens and referral codes."""
import secrets

from passlib.context import CryptContext

# bcrypt hard limit: 72 bytes (UTF-8)
MAX_PASSWORD_BYTES = 72

SESSION_TOKEN_BYTES = 32
REFERRAL_CODE_BYTES = 3

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def configure_hashing(rounds: int) -> None:
    """Set bcrypt cost for new hashes; existing hashes keep verifying."""
    pwd_context.update(bcrypt__rounds=rounds)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def generate_session_token() -> str:
    """256 bits of randomness, hex encoded."""
    return secrets.token_hex(SESSION_TOKEN_BYTES)


def generate_referral_code() -> str:
    """Six uppercase hex characters, e.g. 'A3F09C'."""
    return secrets.token_hex(REFERRAL_CODE_BYTES).upper()
