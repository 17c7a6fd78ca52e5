# dealership/models/detail_sales.py

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from dealership.database import Base


class DetailSale(Base):
    __tablename__ = "detail_sales"

    id = Column(Integer, primary_key=True, index=True)

    sale_id = Column(Integer, ForeignKey("sales.id", ondelete="CASCADE"), nullable=False, index=True)
    motorcycle_id = Column(Integer, ForeignKey("motorcycles.id"), nullable=False, index=True)

    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    discount = Column(Numeric(12, 2), nullable=False, default=0)
    subtotal = Column(Numeric(12, 2), nullable=False)
    notes = Column(String, nullable=True)

    sale = relationship("Sale", back_populates="details")
    motorcycle = relationship("Motorcycle", lazy="joined")

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_detail_quantity_positive"),
        CheckConstraint("discount >= 0", name="ck_detail_discount_non_negative"),
    )
