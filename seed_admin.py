"""
Admin seeding script using SQLAlchemy and bcrypt.
Inserts the first ADMIN account into the users table with a hashed password.

Usage:
    python seed_admin.py

Environment variables (optional):
    ADMIN_EMAIL: Email for admin account (default: admin@example.com)
    ADMIN_USERNAME: Username for admin account (default: admin)
    ADMIN_NAME: Display name (default: Administrator)
    ADMIN_PASSWORD: Password for admin account (default: ChangeMe123!)
"""

import logging
import os
import sys
from pathlib import Path

import bcrypt

# Add the current directory to the system path
sys.path.insert(0, str(Path(__file__).parent))

from core.database import SessionLocal, engine, Base
import models  # noqa: F401
from models.user import User

log = logging.getLogger("seed_admin")


def hash_password(plain_password: str) -> str:
    """Hash a password using bcrypt (readable by the passlib context in AuthService)."""
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(plain_password.encode("utf-8"), salt).decode("utf-8")


def seed_admin() -> bool:
    """Create the admin account, or reset its password if it already exists."""
    admin_email = os.getenv("ADMIN_EMAIL", "admin@example.com")
    admin_username = os.getenv("ADMIN_USERNAME", "admin")
    admin_name = os.getenv("ADMIN_NAME", "Administrator")
    admin_password = os.getenv("ADMIN_PASSWORD", "ChangeMe123!")

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        existing_admin = db.query(User).filter(  # type: ignore
            (User.email == admin_email) | (User.username == admin_username)
        ).first()

        if existing_admin:
            existing_admin.hashed_password = hash_password(admin_password)  # type: ignore[assignment]
            existing_admin.role = "ADMIN"  # type: ignore[assignment]
            existing_admin.is_active = True  # type: ignore[assignment]
            db.commit()
            log.info("Admin %s already existed; password reset", existing_admin.username)
            return True

        admin_user = User(
            email=admin_email,
            name=admin_name,
            username=admin_username,
            hashed_password=hash_password(admin_password),
            role="ADMIN",
            is_active=True,
        )
        db.add(admin_user)
        db.commit()
        log.info("Admin user %s created (id=%s)", admin_user.username, admin_user.id)
        return True
    except Exception as exc:
        db.rollback()
        log.error("Error seeding admin: %s", exc, exc_info=True)
        return False
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    sys.exit(0 if seed_admin() else 1)
