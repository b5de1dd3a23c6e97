"""
Spreadsheet export of report rows.

Two formats share one column layout -- period, store, the nine leaves and
the three derived totals, under a styled header row:

- SpreadsheetML (Excel 2003 XML, saved as ``.xls``), built with ElementTree.
- Office Open XML (``.xlsx``), built with openpyxl.

``write_spreadsheet`` picks the format from the file suffix.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterable
from decimal import Decimal
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from store_kernel.domain.entries import LEAF_FIELDS, ReportRow
from store_kernel.exceptions import EmptyExportError
from store_kernel.logging_config import get_logger
from store_reporting.models import FinancialReport

logger = get_logger("reporting.export")

SPREADSHEET_NS = "urn:schemas-microsoft-com:office:spreadsheet"
XML_PROLOG = '<?xml version="1.0"?>\n<?mso-application progid="Excel.Sheet"?>\n'

HEADER_STYLE = "HeaderStyle"
CURRENCY_STYLE = "CurrencyStyle"
CURRENCY_FORMAT = '"R$" #,##0.00'

LEAF_HEADERS: dict[str, str] = {
    "credit_caixa": "Crédito Caixa",
    "credit_delta": "Crédito Delta",
    "credit_pagbank_debit": "Crédito PagBank Débito",
    "credit_pagbank_credit": "Crédito PagBank Crédito",
    "credit_ifood": "Crédito iFood",
    "debit_caixa": "Débito Caixa",
    "debit_pagbank_debit": "Débito PagBank Débito",
    "debit_pagbank_credit": "Débito PagBank Crédito",
    "debit_loteria": "Débito Lotérica",
}

COLUMN_HEADERS: tuple[str, ...] = (
    "Período",
    "Loja",
    *(LEAF_HEADERS[name] for name in LEAF_FIELDS),
    "Total Receitas",
    "Total Despesas",
    "Resultado Líquido",
)


def row_values(row: ReportRow) -> list:
    """Cell values of one report row, in column order."""
    return [
        row.period.numeric_label,
        row.store,
        *row.amounts.as_dict().values(),
        row.total_revenues,
        row.total_expenses,
        row.net_result,
    ]


def _styles(workbook: ET.Element) -> None:
    styles = ET.SubElement(workbook, "Styles")

    header = ET.SubElement(styles, "Style", {"ss:ID": HEADER_STYLE})
    ET.SubElement(header, "Alignment", {"ss:Horizontal": "Center", "ss:Vertical": "Center"})
    ET.SubElement(header, "Font", {"ss:Bold": "1", "ss:Color": "#FFFFFF"})
    ET.SubElement(header, "Interior", {"ss:Color": "#D32F2F", "ss:Pattern": "Solid"})

    currency = ET.SubElement(styles, "Style", {"ss:ID": CURRENCY_STYLE})
    ET.SubElement(currency, "NumberFormat", {"ss:Format": "Currency"})


def _string_cell(row: ET.Element, text: str, style: str | None = None) -> None:
    attrs = {"ss:StyleID": style} if style else {}
    cell = ET.SubElement(row, "Cell", attrs)
    data = ET.SubElement(cell, "Data", {"ss:Type": "String"})
    data.text = text


def _number_cell(row: ET.Element, value: Decimal) -> None:
    cell = ET.SubElement(row, "Cell", {"ss:StyleID": CURRENCY_STYLE})
    data = ET.SubElement(cell, "Data", {"ss:Type": "Number"})
    data.text = format(value, "f")


def to_spreadsheet_xml(
    rows: Iterable[ReportRow],
    sheet_name: str = "Financeiro",
) -> str:
    """
    Render report rows as a SpreadsheetML workbook.

    Rows are written in the order given.

    Raises:
        EmptyExportError: There are no rows to export.
    """
    rows = tuple(rows)
    if not rows:
        raise EmptyExportError()

    workbook = ET.Element(
        "Workbook",
        {"xmlns": SPREADSHEET_NS, "xmlns:ss": SPREADSHEET_NS},
    )
    _styles(workbook)
    worksheet = ET.SubElement(workbook, "Worksheet", {"ss:Name": sheet_name})
    table = ET.SubElement(worksheet, "Table")

    header = ET.SubElement(table, "Row")
    for title in COLUMN_HEADERS:
        _string_cell(header, title, HEADER_STYLE)

    for report_row in rows:
        line = ET.SubElement(table, "Row")
        label, store, *amounts = row_values(report_row)
        _string_cell(line, label)
        _string_cell(line, store)
        for value in amounts:
            _number_cell(line, value)

    return XML_PROLOG + ET.tostring(workbook, encoding="unicode")


def to_workbook(
    rows: Iterable[ReportRow],
    sheet_name: str = "Financeiro",
) -> Workbook:
    """
    Build an openpyxl workbook with the same layout as the XML export.

    Raises:
        EmptyExportError: There are no rows to export.
    """
    rows = tuple(rows)
    if not rows:
        raise EmptyExportError()

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name

    ws.append(list(COLUMN_HEADERS))
    for cell in ws[1]:
        cell.font = Font(bold=True, color="FFFFFF")
        cell.fill = PatternFill("solid", fgColor="D32F2F")
        cell.alignment = Alignment(horizontal="center", vertical="center")

    for report_row in rows:
        ws.append(row_values(report_row))
    for line in ws.iter_rows(min_row=2, min_col=3):
        for cell in line:
            cell.number_format = CURRENCY_FORMAT

    return wb


def write_spreadsheet(
    report: FinancialReport,
    path: str | Path,
    sheet_name: str = "Financeiro",
) -> Path:
    """
    Write a report's rows to ``path``.

    A ``.xlsx`` suffix writes an Office Open XML workbook; any other suffix
    writes SpreadsheetML.

    Returns:
        The path written.
    """
    target = Path(path)
    if target.suffix.lower() == ".xlsx":
        to_workbook(report.rows, sheet_name).save(target)
        fmt = "xlsx"
    else:
        target.write_text(to_spreadsheet_xml(report.rows, sheet_name), encoding="utf-8")
        fmt = "spreadsheetml"
    logger.info(
        "spreadsheet_exported",
        extra={"path": str(target), "format": fmt, "row_count": len(report.rows)},
    )
    return target
