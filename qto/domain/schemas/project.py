"""Pydantic schemas for Project domain."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from qto.domain.enums import ProjectStatus


class ProjectBase(BaseModel):
    # Optional so that a missing name reaches the service's own validation
    project_name: Optional[str] = None
    project_number: Optional[str] = None
    client_name: Optional[str] = None
    client_contact: Optional[str] = None
    project_address: Optional[str] = None
    start_date: Optional[date] = None
    expected_end_date: Optional[date] = None
    project_status: ProjectStatus = ProjectStatus.PLANNING
    project_description: Optional[str] = None
    contract_value: Optional[float] = None
    currency: Optional[str] = None
    key_reference_numbers: Optional[str] = None


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(ProjectBase):
    pass


class ProjectRead(ProjectBase):
    id: int
    project_name: str
    project_status: str
    created_by_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
