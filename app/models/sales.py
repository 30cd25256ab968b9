"""
SQLAlchemy model for per-customer sales totals reported by the agent.
"""
from sqlalchemy import Column, Integer, String, Float

from app.database import Base


class SalesByCustomerModel(Base):
    __tablename__ = "sales_by_customer"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company = Column(String, nullable=False, index=True)
    period_from = Column(String(10), nullable=False)
    period_to = Column(String(10), nullable=False)
    customer = Column(String, nullable=False)
    total_sales = Column(Float, nullable=False)
    lines = Column(Float)
