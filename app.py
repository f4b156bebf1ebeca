"""Streamlit front-end for the statement validation pipeline."""
from __future__ import annotations

import pandas as pd
import streamlit as st

from statement_checker import ValidateStatementUseCase
from statement_checker.application.dto import StatementUpload, ValidationResponse
from statement_checker.domain.errors import StatementError, StatementValidationError
from statement_checker.domain.models import FailureReason
from statement_checker.log_config import configure_logging
from statement_checker.presentation.report_rendering import (
    error_to_dict,
    failures_to_dataframe,
    records_to_dataframe,
    render_csv,
    render_html,
    render_json,
)


@st.cache_resource
def _setup_logging() -> int:
    return configure_logging()


_setup_logging()
st.set_page_config(page_title="Statement Validator", layout="wide")
st.title("Bank Statement Validation Tool")


def run_validation(content: bytes, filename: str | None, content_type: str | None) -> ValidationResponse:
    upload = StatementUpload(content=content, filename=filename, content_type=content_type)
    return ValidateStatementUseCase().execute(upload)


if "view" not in st.session_state:
    st.session_state["view"] = "upload"
if "result" not in st.session_state:
    st.session_state["result"] = None


if st.session_state["view"] == "upload":
    statement_file = st.file_uploader("Upload statement file", type=["csv", "json"])

    run_btn = st.button("Run Validation", disabled=not statement_file)
    if run_btn and statement_file:
        content = statement_file.read()
        try:
            with st.spinner("Validating..."):
                response = run_validation(content, statement_file.name, statement_file.type)
        except (StatementError, StatementValidationError) as exc:
            problem = error_to_dict(exc)
            st.error(f"{problem['title']}: {problem['detail']}")
            if isinstance(exc, StatementError) and exc.location():
                st.caption(f"Location: {exc.location()}")
        else:
            report = response.report
            st.session_state["result"] = {
                "response": response,
                "failures_csv": render_csv(report.failures),
                "failures_html": render_html(report),
                "report_json": render_json(report),
            }
            st.session_state["view"] = "results"
            st.rerun()
else:
    back_clicked = st.button("← Back", key="back_to_upload")
    if back_clicked:
        st.session_state["view"] = "upload"
        st.session_state["result"] = None
        st.rerun()

    result = st.session_state.get("result")
    if not result:
        st.info("No results available. Upload a file and run validation first.")
    else:
        response: ValidationResponse = result["response"]
        report = response.report

        st.subheader("Summary")
        if report.valid:
            st.success("All records are valid.")
        else:
            st.warning(f"{report.failed_records} of {report.total_records} records failed validation.")
        counts = report.reason_counts()
        col1, col2, col3, col4 = st.columns(4)
        col1.metric("Total records", report.total_records)
        col2.metric("Failed records", report.failed_records)
        col3.metric("Duplicate references", counts[FailureReason.DUPLICATE_REFERENCE])
        col4.metric("Incorrect end balances", counts[FailureReason.INCORRECT_END_BALANCE])

        tabs = st.tabs(["Failures", "Records"])
        with tabs[0]:
            failures_df: pd.DataFrame = failures_to_dataframe(report)
            st.dataframe(failures_df, hide_index=True)
            st.download_button(
                "Download failures CSV",
                data=result["failures_csv"],
                file_name="statement_failures.csv",
                mime="text/csv",
            )
            st.download_button(
                "Download failures HTML",
                data=result["failures_html"].encode("utf-8"),
                file_name="statement_failures.html",
                mime="text/html",
            )
            st.download_button(
                "Download report JSON",
                data=result["report_json"].encode("utf-8"),
                file_name="validation_report.json",
                mime="application/json",
            )
        with tabs[1]:
            st.caption(f"Parsed as {response.file_format.value}")
            st.dataframe(records_to_dataframe(response.records), hide_index=True)
