# FILE: pages/3_Reports_Exports.py
import streamlit as st

from volley_core.errors import RotationError
from volley_core.export_pdf import render_report_pdf
from volley_core.io import dump_document_bytes, export_filename
from volley_core.report import findings_df, format_report, summary_df, zone_table_df
from volley_core.session import ensure_state, get_config, get_document, lineup_arg
from volley_core.validation import validate_document

ensure_state()
ss = st.session_state
st.title("3. Validation Report & Exports")

doc = get_document()
ss["lineup_text"] = st.text_input(
    "Lineup (Z1→Z6 in rotation 1, comma-separated; blank = auto-detect)",
    value=ss["lineup_text"],
)
ss["app_config"]["level_is_legal"] = st.checkbox(
    "Treat exact alignment as legal (FIVB 7.4.3)",
    value=ss["app_config"]["level_is_legal"],
)

try:
    report = validate_document(doc, lineup_arg(), get_config())
except RotationError as e:
    st.error(str(e))
    st.stop()

if report.passed and not report.warning_count:
    st.success("All checks passed! No errors or warnings.")
elif report.passed:
    st.warning(f"Passed with {report.warning_count} warning(s).")
else:
    st.error(f"{report.error_count} error(s), {report.warning_count} warning(s).")

zones = zone_table_df(report, doc)
findings = findings_df(report)

st.subheader("Zone assignments")
st.dataframe(zones, use_container_width=True)
st.subheader("Findings by phase")
st.dataframe(summary_df(report), use_container_width=True)
st.subheader("Findings")
st.dataframe(findings, hide_index=True, use_container_width=True)

st.subheader("Exports")
st.download_button("Export rotation JSON", data=dump_document_bytes(doc),
                   file_name=export_filename(doc), mime="application/json")
st.download_button("Download report (text)", data=format_report(doc, report).encode("utf-8"),
                   file_name="rotation-report.txt")
st.download_button("Download report (PDF)", data=render_report_pdf(report, zones, findings),
                   file_name="rotation-report.pdf", mime="application/pdf")
