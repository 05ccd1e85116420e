# volley_core/report.py
from __future__ import annotations
from typing import Dict, List, Tuple

import pandas as pd

from .constants import ZONES
from .models import Finding, RotationDocument, ValidationReport
from .zones import zone_table

RULE = "=" * 60
THIN_RULE = "-" * 60


# -----------------------
# Tables
# -----------------------
def zone_table_df(report: ValidationReport, doc: RotationDocument) -> pd.DataFrame:
    rows = []
    for row in zone_table(report.lineup, doc.players):
        rec = {"Rotation": row["rotation"]}
        for z in ZONES:
            rec[f"Z{z}"] = row["zones"][z]
        rec["Front Row"] = ", ".join(row["front_row"])
        rec["Setter"] = row["setter"] or "none"
        rows.append(rec)
    return pd.DataFrame(rows).set_index("Rotation")

def findings_df(report: ValidationReport) -> pd.DataFrame:
    cols = ["severity", "phase", "rotation", "message"]
    if not report.findings:
        return pd.DataFrame(columns=cols)
    return pd.DataFrame([f.model_dump() for f in report.findings])[cols]

def summary_df(report: ValidationReport) -> pd.DataFrame:
    """Error/warning counts per phase (phases with no findings are omitted)."""
    df = findings_df(report)
    if df.empty:
        return pd.DataFrame(columns=["error", "warning"])
    out = df.pivot_table(index="phase", columns="severity", values="message", aggfunc="count", fill_value=0)
    for col in ("error", "warning"):
        if col not in out.columns:
            out[col] = 0
    return out[["error", "warning"]].astype(int)


# -----------------------
# Console report
# -----------------------
def _grouped(findings: List[Finding]) -> Dict[Tuple[str, int], List[Finding]]:
    groups: Dict[Tuple[str, int], List[Finding]] = {}
    for f in findings:
        groups.setdefault((f.phase, f.rotation), []).append(f)
    return groups

def verdict(report: ValidationReport) -> str:
    if report.error_count == 0 and report.warning_count == 0:
        return "All checks passed! No errors or warnings."
    if report.error_count > 0:
        return "Validation FAILED: overlap or structural errors found."
    return "Validation passed with warnings."

def format_report(doc: RotationDocument, report: ValidationReport) -> str:
    lines: List[str] = [
        RULE,
        f"Validating: {doc.name}",
        f"Description: {doc.description or 'N/A'}",
        f"Players: {', '.join(p.display for p in doc.players)}",
        RULE,
        "",
        f"Lineup (Z1->Z6 in R1): {', '.join(report.lineup)}",
    ]
    libero = doc.libero
    if libero is not None:
        lines.append(f"Libero: {libero.display} ({libero.id})")
    lines.append("")

    lines.append("Zone Assignments per Rotation:")
    lines.append("Rot  | Z1   Z2   Z3   Z4   Z5   Z6   | Front Row        | Setter")
    lines.append("-----|-------------------------------|------------------|-------")
    for row in zone_table(report.lineup, doc.players):
        zone_str = " ".join(row["zones"][z].ljust(4) for z in ZONES)
        front = ", ".join(row["front_row"])
        lines.append(f"  {row['rotation']}  | {zone_str}| {front.ljust(17)}| {row['setter'] or 'none'}")
    lines.append("")

    for (phase, rotation), group in _grouped(report.findings).items():
        lines.append(f"  {phase} R{rotation}:")
        for f in group:
            if f.severity == "error":
                lines.append(f"    ERROR: {f.message}")
        for f in group:
            if f.severity == "warning":
                lines.append(f"    WARN:  {f.message}")

    lines.append("")
    lines.append(THIN_RULE)
    if report.findings:
        lines.append(f"Results: {report.error_count} error(s), {report.warning_count} warning(s)")
    lines.append(verdict(report))
    return "\n".join(lines)
