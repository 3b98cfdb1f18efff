"""
Export the transactions of a period to a spreadsheet (xlsx) or a document (pdf).

The functions here only depend on the transactions and the period, and return the file content as bytes. Saving
or downloading the file is up to the caller.
"""
import math
import pandas as pd

from io import BytesIO
from openpyxl.styles import Font
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from migasto import APP_NAME
from migasto.app.naming_conventions import ExportFields, MONTH_NAMES
from migasto.app.utils.aggregations import (
    coerce_amounts,
    transaction_type_label,
    date_col,
    type_col,
    category_col,
    desc_col,
    ensure_columns,
)


SHEET_NAME = 'Transacciones'
# openpyxl column widths are measured in characters
EXCEL_COLUMN_WIDTHS = [16, 13, 19, 13, 31]
export_columns = [field.value for field in ExportFields]


def _text(value) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ''
    return str(value)


def export_title(year: int, month: int) -> str:
    """Get the title of an export, e.g. "MiGasto - Marzo 2024"."""
    return f"{APP_NAME} - {MONTH_NAMES[month - 1]} {year}"


def export_file_name(year: int, month: int, extension: str) -> str:
    """Get the file name of an export, e.g. "MiGasto_Mar_2024.xlsx"."""
    return f"{APP_NAME}_{MONTH_NAMES[month - 1][:3]}_{year}.{extension.lstrip('.')}"


def export_table(df: pd.DataFrame) -> pd.DataFrame:
    """
    Shape the transactions into the rows of an export.

    Parameters
    ----------
    df : pd.DataFrame
        the transactions of the exported period

    Returns
    -------
    pd.DataFrame
        one row per transaction, in the given order, with the columns Fecha, Tipo, Categoría, Monto and
        Descripción. the type is localized, the amount is a string with 2 decimal places and a missing
        description is an empty string
    """
    df = ensure_columns(df)
    amounts = coerce_amounts(df)
    return pd.DataFrame({
        ExportFields.DATE.value: [_text(value) for value in df[date_col]],
        ExportFields.TYPE.value: [transaction_type_label(value) for value in df[type_col]],
        ExportFields.CATEGORY.value: [_text(value) for value in df[category_col]],
        ExportFields.AMOUNT.value: [f"{amount:.2f}" for amount in amounts],
        ExportFields.DESCRIPTION.value: [_text(value) for value in df[desc_col]],
    }, columns=export_columns)


def transactions_to_excel(df: pd.DataFrame, year: int, month: int) -> bytes:
    """
    Export the transactions to an xlsx workbook with a single sheet. The title is in the first row and the table
    starts at the second row.

    Returns
    -------
    bytes
        the content of the xlsx file
    """
    table = export_table(df)
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        table.to_excel(writer, sheet_name=SHEET_NAME, index=False, startrow=1)
        sheet = writer.sheets[SHEET_NAME]
        sheet['A1'] = export_title(year, month)
        sheet['A1'].font = Font(bold=True, size=14)
        for column_letter, width in zip('ABCDE', EXCEL_COLUMN_WIDTHS):
            sheet.column_dimensions[column_letter].width = width
    return buffer.getvalue()


def transactions_to_pdf(df: pd.DataFrame, year: int, month: int) -> bytes:
    """
    Export the transactions to an A4 pdf document with a title header and a table of the transactions.

    Returns
    -------
    bytes
        the content of the pdf file
    """
    table = export_table(df)
    title = export_title(year, month)
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, title=title, leftMargin=40, rightMargin=40, topMargin=40)
    styles = getSampleStyleSheet()

    rows = [export_columns] + table.values.tolist()
    pdf_table = Table(rows, repeatRows=1, hAlign='LEFT')
    pdf_table.setStyle(TableStyle([
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#0b66ff')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('ALIGN', (3, 1), (3, -1), 'RIGHT'),
        ('GRID', (0, 0), (-1, -1), 0.25, colors.lightgrey),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#f5f8ff')]),
    ]))

    doc.build([Paragraph(title, styles['Title']), Spacer(1, 12), pdf_table])
    return buffer.getvalue()
