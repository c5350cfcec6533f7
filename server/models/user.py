# server/models/user.py

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from . import Base


# -------------------------------
# User Model
# -------------------------------

class User(Base):
    """
    Database model for shop users.
    Username and email are unique; email is the login key.
    The password column only ever holds a bcrypt hash.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    def to_public(self) -> dict:
        return {"id": self.id, "username": self.username, "email": self.email}
