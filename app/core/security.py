from typing import List, Optional
from passlib.context import CryptContext
from app.core.config import settings


def build_password_context(schemes: Optional[List[str]] = None) -> CryptContext:
    """
    Build the password hashing context.
    The first scheme hashes new passwords; every other scheme is deprecated,
    so hashes stored with it still verify but are flagged for re-hashing.
    """
    schemes = schemes or settings.password_schemes_list
    return CryptContext(schemes=schemes, deprecated="auto")


# Password hashing context
pwd_context = build_password_context()


def get_password_hash(password: str) -> str:
    """Hash a password"""
    return pwd_context.hash(password)


def mask_email(email: str) -> str:
    """Mask email address"""
    if '@' not in email:
        return email

    username, domain = email.split('@', 1)
    if len(username) <= 2:
        masked_username = username[0] + '*'
    else:
        masked_username = username[0] + '*' * (len(username) - 2) + username[-1]

    return f"{masked_username}@{domain}"
