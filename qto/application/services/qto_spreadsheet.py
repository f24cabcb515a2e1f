"""QTO spreadsheet bridge.

Handles:
- Exporting a project's QTO items to .xlsx ("QTO Sheet" + "Summary")
- Importing QTO items from the first worksheet of an uploaded .xlsx
- Loose header discovery (case-insensitive substring match on row 1)
- Lenient numeric parsing (numbers, numeric strings, "$1,234.50")

Each imported row is inserted and committed on its own. A failing row is
reported and the import carries on, so partial imports are expected.
"""

import math
import re
from datetime import datetime
from io import BytesIO
from typing import Any, Dict, List, Optional, Sequence, Tuple

import openpyxl
from openpyxl.utils import get_column_letter
import pandas as pd
import pytz
import structlog

from qto.config import get_settings
from qto.core.exceptions import ParseError, StorageError
from qto.domain.models.project import Project
from qto.domain.models.qto_item import QTOItem
from qto.domain.repositories.project_repository import ProjectRepository
from qto.domain.repositories.qto_item_repository import QTOItemRepository
from qto.domain.schemas.auth import SessionUser
from qto.domain.schemas.common import ImportResult
from qto.application.services.qto_item_service import build_item_values, load_project_for_items

settings = get_settings()
logger = structlog.get_logger(__name__)

QTO_SHEET = "QTO Sheet"
SUMMARY_SHEET = "Summary"

QUANTITY_FORMAT = "0.00"
MONEY_FORMAT = "#,##0.00"

# Export layout: (header, item attribute, column width, number format)
EXPORT_COLUMNS = [
    ("ID", "id", 10, None),
    ("CSI Code", "csi_code", 15, None),
    ("Item Description", "item_description", 50, None),
    ("Quantity", "quantity", 15, QUANTITY_FORMAT),
    ("Unit", "unit", 10, None),
    ("Unit Rate", "unit_rate", 15, MONEY_FORMAT),
    ("Total Cost", "total_cost", 15, MONEY_FORMAT),
    ("Notes", "notes", 30, None),
    ("BOQ Item", "is_boq_item", 10, None),
    ("BOQ Division", "boq_division", 20, None),
]

# Import header discovery, in resolution order. "unit rate" is resolved before
# "unit" so the looser keyword cannot claim the rate column.
HEADER_KEYWORDS = [
    ("csi_code", "csi code"),
    ("item_description", "description"),
    ("quantity", "quantity"),
    ("unit_rate", "unit rate"),
    ("unit", "unit"),
    ("notes", "notes"),
    ("is_boq_item", "boq item"),
    ("boq_division", "boq division"),
]

TRUE_VALUES = {"yes", "y", "true", "1", "x"}


# --- Export ---------------------------------------------------------------

def get_current_date():
    """Today in the configured timezone."""
    return datetime.now(pytz.timezone(settings.TIMEZONE)).date()


def build_export_filename(project_name: str) -> str:
    dotted_name = re.sub(r"\s+", ".", project_name)
    return f"QTO_Export_{dotted_name}_{get_current_date().isoformat()}.xlsx"


def _items_frame(items: Sequence[QTOItem]) -> pd.DataFrame:
    rows = []
    for item in items:
        row = {}
        for header, attribute, _, _ in EXPORT_COLUMNS:
            value = getattr(item, attribute)
            if attribute == "is_boq_item":
                value = "Yes" if value else "No"
            row[header] = value
        rows.append(row)
    return pd.DataFrame(rows, columns=[header for header, _, _, _ in EXPORT_COLUMNS])


def total_estimated_cost(items_df: pd.DataFrame) -> float:
    """Sum of total costs, missing totals counted as zero."""
    totals = pd.to_numeric(items_df["Total Cost"], errors="coerce").fillna(0)
    return float(totals.sum())


def _summary_frame(project: Project, items_df: pd.DataFrame) -> pd.DataFrame:
    return pd.DataFrame(
        [
            ["Project Name:", project.project_name],
            ["Project Number:", project.project_number],
            ["Client:", project.client_name],
            ["Total QTO Items:", len(items_df)],
            ["Total Estimated Cost:", total_estimated_cost(items_df)],
        ]
    )


def render_workbook(project: Project, items: Sequence[QTOItem]) -> bytes:
    items_df = _items_frame(items)
    summary_df = _summary_frame(project, items_df)

    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        items_df.to_excel(writer, sheet_name=QTO_SHEET, index=False)
        summary_df.to_excel(writer, sheet_name=SUMMARY_SHEET, index=False, header=False)

        qto_ws = writer.sheets[QTO_SHEET]
        for col_idx, (_, _, width, number_format) in enumerate(EXPORT_COLUMNS, start=1):
            letter = get_column_letter(col_idx)
            qto_ws.column_dimensions[letter].width = width
            if number_format:
                for row_idx in range(2, len(items_df) + 2):
                    qto_ws.cell(row=row_idx, column=col_idx).number_format = number_format

        summary_ws = writer.sheets[SUMMARY_SHEET]
        summary_ws.column_dimensions["A"].width = 24
        summary_ws.column_dimensions["B"].width = 40
        summary_ws["B5"].number_format = MONEY_FORMAT

    return buffer.getvalue()


def export_project_to_xlsx(
    project_repo: ProjectRepository,
    item_repo: QTOItemRepository,
    project_id: int,
    actor: SessionUser,
) -> Tuple[str, bytes]:
    """Return (filename, xlsx bytes) for a project the actor owns (or any, for Admin)."""
    project = load_project_for_items(project_repo, project_id, actor)
    items = item_repo.list_for_project(project_id)

    content = render_workbook(project, items)
    filename = build_export_filename(project.project_name)
    logger.info(
        "Project exported",
        project_id=project_id,
        user_id=actor.user_id,
        item_count=len(items),
    )
    return filename, content


# --- Import ---------------------------------------------------------------

def parse_number(value: Any) -> Optional[float]:
    """Numeric cell or numeric string to float; anything else to None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        s = re.sub(r"[$,\s]", "", str(value))
        if not s:
            return None
        try:
            number = float(s)
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def parse_flag(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    return str(value).strip().lower() in TRUE_VALUES


def _cell_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def discover_columns(header_row: Sequence[Any]) -> Dict[str, int]:
    """Map field name -> 0-based column index from loosely named headers."""
    headers = [str(h).strip().lower() if h is not None else "" for h in header_row]
    columns: Dict[str, int] = {}
    claimed = set()
    for field, keyword in HEADER_KEYWORDS:
        for idx, header in enumerate(headers):
            if idx not in claimed and keyword in header:
                columns[field] = idx
                claimed.add(idx)
                break
    return columns


def _cell(row: Sequence[Any], columns: Dict[str, int], field: str) -> Any:
    idx = columns.get(field)
    if idx is None or idx >= len(row):
        return None
    return row[idx]


def _load_first_sheet(content: bytes):
    try:
        workbook = openpyxl.load_workbook(BytesIO(content), data_only=True)
    except Exception as e:
        logger.warning("Excel file load failed", error=str(e))
        raise ParseError(
            "Failed to read the Excel file. It might be corrupted or in an unsupported format."
        ) from e

    if not workbook.worksheets:
        raise ParseError("No worksheet found in the Excel file.")
    return workbook.worksheets[0]


def row_to_item_data(row: Sequence[Any], columns: Dict[str, int]) -> Optional[Dict[str, Any]]:
    """Item fields for one data row, or None when the row has no description."""
    description = _cell_text(_cell(row, columns, "item_description"))
    if not description:
        return None

    return {
        "csi_code": _cell_text(_cell(row, columns, "csi_code")),
        "item_description": description,
        "quantity": parse_number(_cell(row, columns, "quantity")),
        "unit": _cell_text(_cell(row, columns, "unit")),
        "unit_rate": parse_number(_cell(row, columns, "unit_rate")),
        "notes": _cell_text(_cell(row, columns, "notes")),
        "is_boq_item": parse_flag(_cell(row, columns, "is_boq_item")),
        "boq_division": _cell_text(_cell(row, columns, "boq_division")),
    }


def import_qto_from_xlsx(
    project_repo: ProjectRepository,
    item_repo: QTOItemRepository,
    project_id: int,
    actor: SessionUser,
    content: bytes,
) -> ImportResult:
    load_project_for_items(project_repo, project_id, actor)

    sheet = _load_first_sheet(content)
    rows = sheet.iter_rows(min_row=1, values_only=True)

    header_row = next(rows, None) or ()
    columns = discover_columns(header_row)
    if "item_description" not in columns:
        raise ParseError("Required 'Item Description' column not found in the Excel sheet.")

    items_added = 0
    import_errors: List[str] = []

    # Spreadsheet row numbers are 1-based and row 1 is the header
    for row_number, row in enumerate(rows, start=2):
        data = row_to_item_data(row, columns)
        if data is None:
            continue

        try:
            item_repo.create(build_item_values(project_id, data, actor))
            items_added += 1
        except StorageError as e:
            logger.error("Import row failed", project_id=project_id, row=row_number)
            import_errors.append(f"Row {row_number} ('{data['item_description']}'): {e.message}")

    logger.info(
        "QTO import finished",
        project_id=project_id,
        user_id=actor.user_id,
        items_added=items_added,
        errors=len(import_errors),
    )

    if import_errors:
        return ImportResult(
            message=f"Import completed with {items_added} items added and {len(import_errors)} errors.",
            type="error",
            items_added=items_added,
            errors=import_errors,
        )

    return ImportResult(
        message=f"{items_added} QTO items imported successfully!",
        type="success",
        items_added=items_added,
    )
