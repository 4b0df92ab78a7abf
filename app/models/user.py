"""
User accounts and their job applications.
"""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text, false
from app.core.database import Base


class User(Base):
    """
    User account, keyed by username. Admins may manage every resource.
    """
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)
    password = Column(Text, nullable=False)  # bcrypt hash
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"


class Application(Base):
    """
    Join row recording that a user applied to a job.
    """
    __tablename__ = "applications"

    username = Column(String(25), ForeignKey("users.username", ondelete="CASCADE"), primary_key=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True)

    def __repr__(self):
        return f"<Application(username='{self.username}', job_id={self.job_id})>"
