from passlib.context import CryptContext

from src.core.config import BCRYPT_ROUNDS


def build_password_context(rounds: int = BCRYPT_ROUNDS) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


pwd_context = build_password_context()


def hash_password(password: str, context: CryptContext = pwd_context) -> str:
    return context.hash(password)


def verify_password(
    plain_password: str, password_hash: str, context: CryptContext = pwd_context
) -> bool:
    if not plain_password or not password_hash:
        return False
    try:
        return context.verify(plain_password, password_hash)
    except ValueError:
        # Unrecognised or malformed hash
        return False
