"""
SQLAlchemy model for persisted vouchers.
"""
from sqlalchemy import Column, Integer, String, JSON

from app.database import Base


class VoucherModel(Base):
    __tablename__ = "vouchers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    agent_id = Column(String)
    company = Column(String, index=True)
    timestamp = Column(String, nullable=False)  # ISO-8601 as sent by the agent
    voucher_date = Column(String(10), index=True)  # YYYY-MM-DD or NULL
    voucher_number = Column(String)
    voucher_type = Column(String)
    unique_key = Column(String, nullable=False, unique=True)
    payload = Column(JSON, nullable=False)
