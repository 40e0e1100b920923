"""
User model for authentication and authorization.
"""
from sqlalchemy import Column, Integer, String, Boolean

from app.core.database import Base


class User(Base):
    """Storefront account; maps onto the legacy ``users`` table columns."""
    __tablename__ = "users"

    id = Column("user_id", Integer, primary_key=True, autoincrement=True)
    name = Column("user_name", String(100), nullable=False)
    email = Column("user_email", String(255), unique=True, nullable=False, index=True)
    password_hash = Column("user_password", String(255), nullable=False)
    contact_no = Column("user_contact_no", String(20), nullable=True)
    is_admin = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<User {self.email} (admin={self.is_admin})>"
