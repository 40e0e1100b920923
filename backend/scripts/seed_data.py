"""
Seed the database with an admin account for development.

Usage:
    python -m scripts.seed_data
    python -m scripts.seed_data --email owner@shop.test --password S3cret!
"""

import argparse

from app.core.database import SessionLocal
from app.core.exceptions import ConflictError
from app.services.auth_service import AuthService
from app.services.session_service import InMemorySessionStore

DEFAULT_EMAIL = "admin@demo.com"
DEFAULT_PASSWORD = "admin123"  # CHANGE IN PRODUCTION!


def seed_database(email: str = DEFAULT_EMAIL, password: str = DEFAULT_PASSWORD, name: str = "Admin") -> None:
    """Create an admin user unless one with this email already exists."""
    db = SessionLocal()

    try:
        print("🌱 Starting database seeding...")

        # Seeding never opens a session, so no real store is needed
        auth = AuthService(db, InMemorySessionStore())

        print("\n👤 Creating admin user...")
        try:
            user_id = auth.signup(name=name, email=email, password=password, is_admin=True)
        except ConflictError:
            print("⚠️  Admin user already exists. Skipping user creation.")
            print(f"   Email: {email}")
        else:
            print(f"✅ Admin user created (ID: {user_id})")
            print(f"   Email: {email}")

        print("\n" + "="*60)
        print("✅ Database seeding completed successfully!")
        print("="*60)
        if password == DEFAULT_PASSWORD:
            print("\n⚠️  IMPORTANT: Change the default password in production!")
            print("="*60)

    except Exception as e:
        print(f"\n❌ Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--email", default=DEFAULT_EMAIL)
    parser.add_argument("--password", default=DEFAULT_PASSWORD)
    parser.add_argument("--name", default="Admin")
    args = parser.parse_args()
    seed_database(args.email, args.password, args.name)
