"""Result shapes shared by write actions."""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel


class ActionResponse(BaseModel):
    message: str
    type: Literal["success", "error"] = "success"
    project_id: Optional[int] = None
    qto_item_id: Optional[int] = None
    errors: Optional[Dict[str, str]] = None


class ImportResult(BaseModel):
    """Outcome of a spreadsheet import. Partial success is reported as type "error"."""
    message: str
    type: Literal["success", "error"]
    items_added: int = 0
    errors: List[str] = []
