from sqlalchemy import CheckConstraint, Column, Integer, String, Text
from app.core.database import Base


class Company(Base):
    """
    Company that posts jobs. Keyed by a short, URL-safe handle.
    """
    __tablename__ = "companies"

    handle = Column(String(25), CheckConstraint("handle = lower(handle)"), primary_key=True)
    name = Column(Text, unique=True, nullable=False)
    num_employees = Column(Integer, CheckConstraint("num_employees >= 0"), nullable=True)
    description = Column(Text, nullable=False)
    logo_url = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Company(handle='{self.handle}', name='{self.name}')>"
