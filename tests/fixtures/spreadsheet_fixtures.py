"""Spreadsheet fixtures: in-memory .xlsx documents."""

from io import BytesIO

import openpyxl
import pytest

QTO_HEADER = ["CSI Code", "Description", "Quantity", "Unit", "Unit Rate"]


def workbook_bytes(rows, sheet_title="QTO"):
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = sheet_title
    for row in rows:
        sheet.append(row)
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def build_xlsx():
    """Factory turning a list of rows into .xlsx bytes."""
    return workbook_bytes


@pytest.fixture
def qto_header():
    return list(QTO_HEADER)
