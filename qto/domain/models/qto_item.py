"""QTO line item — maps to the 'qto_items' table."""

from sqlalchemy import Boolean, Column, Integer, String, Float, DateTime, ForeignKey, Text
from sqlalchemy.sql import func

from qto.infrastructure.database import Base


class QTOItem(Base):
    __tablename__ = "qto_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)

    csi_code = Column(String(50), nullable=True, index=True)
    item_description = Column(Text, nullable=False)
    quantity = Column(Float, nullable=True)
    unit = Column(String(50), nullable=True)
    unit_rate = Column(Float, nullable=True)
    # Always quantity * unit_rate, recomputed on every write
    total_cost = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    is_boq_item = Column(Boolean, nullable=False, default=False)
    boq_division = Column(String(200), nullable=True)

    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<QTOItem {self.id} - {self.item_description}>"
