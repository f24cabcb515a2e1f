"""Project domain model — maps to the 'projects' table."""

from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey, Text
from sqlalchemy.sql import func

from qto.domain.enums import ProjectStatus
from qto.infrastructure.database import Base


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_name = Column(String(255), nullable=False)
    project_number = Column(String(100), unique=True, nullable=True, index=True)

    # Client
    client_name = Column(String(255), nullable=True)
    client_contact = Column(String(255), nullable=True)
    project_address = Column(Text, nullable=True)

    # Schedule
    start_date = Column(Date, nullable=True)
    expected_end_date = Column(Date, nullable=True)
    project_status = Column(String(50), nullable=False, default=ProjectStatus.PLANNING.value)

    project_description = Column(Text, nullable=True)
    contract_value = Column(Float, nullable=True)
    currency = Column(String(10), nullable=True)
    key_reference_numbers = Column(Text, nullable=True)

    # Ownership is set once at creation
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Project {self.id} - {self.project_name}>"
