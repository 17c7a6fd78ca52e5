# dealership/models/sales.py

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from dealership.core.enums import PaymentMethod, SaleStatus
from dealership.database import Base


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    sale_number = Column(String, unique=True, index=True, nullable=False)

    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)

    sale_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    status = Column(Enum(SaleStatus, name="sale_status"), nullable=False, default=SaleStatus.PENDING)
    payment_method = Column(Enum(PaymentMethod, name="payment_method"), nullable=True)

    total = Column(Numeric(12, 2), nullable=False)

    customer = relationship("Customer", lazy="joined")
    employee = relationship("Employee", lazy="joined")

    details = relationship(
        "DetailSale",
        back_populates="sale",
        cascade="all, delete-orphan",
        order_by="DetailSale.id",
    )

    __table_args__ = (
        Index("ix_sales_customer_employee", "customer_id", "employee_id"),
    )
