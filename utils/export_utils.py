# utils/export_utils.py
import io

import pandas as pd
from xlsxwriter.utility import xl_col_to_name

REPORT_SHEET = "Ventas por Día"
REPORT_HEADERS = {"name": "Día", "ventas": "Ventas (S/)"}


# -----------------------------
# Export Sales Report to Excel
# -----------------------------
def export_sales_report_excel(df: pd.DataFrame, business_name: str = "") -> bytes:
    """
    Returns XLSX bytes for the sales-per-weekday table:
    - Spanish headers, one row per weekday as computed for the page
    - Currency format on the sales column
    - A closing total row written as a SUM formula
    """
    df = df.copy()
    for col in REPORT_HEADERS:
        if col not in df.columns:
            df[col] = None
    df = df[list(REPORT_HEADERS)].rename(columns=REPORT_HEADERS)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="xlsxwriter") as writer:
        df.to_excel(writer, index=False, sheet_name=REPORT_SHEET, startrow=1 if business_name else 0)
        workbook = writer.book
        worksheet = writer.sheets[REPORT_SHEET]

        header_row = 1 if business_name else 0
        if business_name:
            worksheet.write(0, 0, business_name, workbook.add_format({"bold": True}))

        money = workbook.add_format({"num_format": "#,##0.00"})
        worksheet.set_column(0, 0, 14)
        worksheet.set_column(1, 1, 16, money)

        if len(df) > 0:
            col = xl_col_to_name(1)
            first = header_row + 2  # 1-indexed, first data row
            last = header_row + 1 + len(df)
            total_row = header_row + 1 + len(df)  # 0-indexed, just below the data
            bold = workbook.add_format({"bold": True})
            worksheet.write(total_row, 0, "Total", bold)
            worksheet.write_formula(
                total_row, 1, f"=SUM({col}{first}:{col}{last})",
                workbook.add_format({"bold": True, "num_format": "#,##0.00"}),
            )

    return output.getvalue()
