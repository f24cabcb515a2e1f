"""Pydantic schemas for QTO line items."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class QTOItemBase(BaseModel):
    csi_code: Optional[str] = None
    item_description: Optional[str] = None
    quantity: Optional[float] = None
    unit: Optional[str] = None
    unit_rate: Optional[float] = None
    notes: Optional[str] = None
    is_boq_item: bool = False
    boq_division: Optional[str] = None


class QTOItemCreate(QTOItemBase):
    pass


class QTOItemUpdate(QTOItemBase):
    pass


class QTOItemRead(QTOItemBase):
    id: int
    project_id: int
    item_description: str
    total_cost: Optional[float] = None
    created_by_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
