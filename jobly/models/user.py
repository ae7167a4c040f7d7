"""
User model for authentication and job applications.

The password column holds a bcrypt hash and is only read when
authenticating; every other query projects it away.
"""

from sqlalchemy import Boolean, Column, String, Text, false
from sqlalchemy.orm import relationship
from jobly.core.database import Base


class User(Base):
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)
    password = Column(Text, nullable=False)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())

    # Relationships
    applications = relationship("Application", back_populates="user", passive_deletes=True)

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
