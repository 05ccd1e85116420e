# volley_core/export_pdf.py
from __future__ import annotations
import io
from html import escape

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .models import ValidationReport
from .report import verdict

_TABLE_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, -1), 9),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ("ALIGN", (0, 0), (-1, -1), "LEFT"),
    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
])


def _df_table(df: pd.DataFrame, index_label: str) -> Table:
    data = [[index_label] + [str(c) for c in df.columns]]
    for idx, row in df.iterrows():
        data.append([str(idx)] + [str(v) for v in row.values])
    t = Table(data, repeatRows=1)
    t.setStyle(_TABLE_STYLE)
    return t

def render_report_pdf(report: ValidationReport, zone_df: pd.DataFrame, findings: pd.DataFrame) -> bytes:
    """Printable validation summary: zone table then every finding."""
    buf = io.BytesIO()
    styles = getSampleStyleSheet()
    pdf = SimpleDocTemplate(buf, pagesize=landscape(letter), leftMargin=40, rightMargin=40)

    story = [
        Paragraph(f"{escape(report.document_name)} - Rotation Check", styles["Title"]),
        Paragraph(escape(f"Lineup (Z1-Z6 in R1): {', '.join(report.lineup)}"), styles["Normal"]),
        Paragraph(
            f"{report.error_count} error(s), {report.warning_count} warning(s). {verdict(report)}",
            styles["Normal"],
        ),
        Spacer(1, 12),
        _df_table(zone_df, "Rotation"),
        Spacer(1, 18),
    ]
    if findings.empty:
        story.append(Paragraph("No findings.", styles["Normal"]))
    else:
        rows = [["Severity", "Phase", "Rotation", "Message"]]
        for _, f in findings.iterrows():
            rows.append([f["severity"], f["phase"], str(f["rotation"]), Paragraph(escape(f["message"]), styles["Normal"])])
        t = Table(rows, repeatRows=1, colWidths=[60, 100, 55, 490])
        t.setStyle(_TABLE_STYLE)
        story.append(t)

    pdf.build(story)
    return buf.getvalue()
