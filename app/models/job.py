from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String, Text
from app.core.database import Base


class Job(Base):
    """
    Job posting belonging to a company.

    Equity is a fraction of the company (0 to 1) kept as NUMERIC so it
    round-trips as an exact decimal string.
    """
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    salary = Column(Integer, CheckConstraint("salary >= 0"), nullable=True)
    equity = Column(Numeric, CheckConstraint("equity <= 1.0"), nullable=True)
    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', company_handle='{self.company_handle}')>"
