"""
Discrepancy checker - Review UI

Streamlit application for scanning a document corpus and reviewing
conflicting numbers.
"""

import logging

import pandas as pd
import streamlit as st

from discrepancy.config import Config
from discrepancy.corpus import CorpusError
from discrepancy.analysis.scanner import DiscrepancyScanner
from discrepancy.models import ConflictReport, DirectConflict, SimilarContextConflict
from discrepancy.reporting import render_markdown

Config.setup_logging()
logger = logging.getLogger(__name__)

# Page config
st.set_page_config(
    page_title="Discrepancy Check",
    page_icon="🔎",
    layout="wide",
    initial_sidebar_state="expanded",
)


def init_session_state():
    """Initialize session state variables."""
    if "report" not in st.session_state:
        st.session_state.report = None
    if "facts" not in st.session_state:
        st.session_state.facts = []


init_session_state()


def render_header():
    """Render the page header."""
    st.title("🔎 Discrepancy Check")
    st.caption("Find numbers that disagree across your documents. Review before fixing.")


def render_sidebar() -> tuple[str, bool]:
    """Render the sidebar with corpus selection."""
    with st.sidebar:
        st.header("📁 Corpus")

        root = st.text_input(
            "Corpus directory",
            value=".",
            help="Directory to scan for text documents",
        )

        rich_documents = st.checkbox(
            "Include PDF and Excel files",
            value=False,
        )

        st.caption(f"Extensions: {', '.join(Config.TEXT_EXTENSIONS)}")
        st.caption(f"Ignored: {', '.join(Config.IGNORE_NAMES)}")

    return root, rich_documents


def run_scan(root: str, rich_documents: bool):
    """Scan the corpus and store facts and report in session state."""
    scanner = DiscrepancyScanner()

    try:
        documents = scanner.iter_directory(root, include_rich_documents=rich_documents)
        facts, scanned, skipped = scanner.collect_facts(documents)
    except CorpusError as e:
        st.error(f"❌ {e}")
        return

    st.session_state.facts = facts
    st.session_state.report = scanner.build_report(facts, scanned, skipped)


def render_statistics(report: ConflictReport):
    """Render summary metrics."""
    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric("Documents", report.documents_scanned)
    with col2:
        st.metric("Facts", report.total_facts)
    with col3:
        st.metric("Direct Conflicts", len(report.direct_conflicts))
    with col4:
        st.metric("Similar-Context Groups", len(report.similar_context_conflicts))


def render_conflict_card(conflict: DirectConflict | SimilarContextConflict, index: int):
    """Render a single conflict."""
    if isinstance(conflict, DirectConflict):
        st.markdown(f"**#{index + 1} Context:** `{conflict.context_key}`")
    else:
        st.markdown(f"**#{index + 1} Similar contexts:**")
        for key in conflict.context_keys:
            st.markdown(f"- `{key}`")

    rows = [
        {
            "Value": v.display_value,
            "Documents": ", ".join(v.documents),
            "Raw": "; ".join(v.raw_forms),
        }
        for v in conflict.values
    ]
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
    st.divider()


def render_facts_tab():
    """Render the extracted facts table."""
    facts = st.session_state.facts
    if not facts:
        st.info("📭 No facts extracted.")
        return

    search = st.text_input("Search context", value="")
    df = pd.DataFrame([f.to_display_dict() for f in facts])
    if search:
        df = df[df["Context"].str.contains(search.lower(), regex=False)]

    st.dataframe(df, use_container_width=True, hide_index=True)


def main():
    """Main application entry point."""
    render_header()
    root, rich_documents = render_sidebar()

    if st.button("🔍 Scan Corpus", type="primary", use_container_width=True):
        with st.spinner("Scanning documents..."):
            run_scan(root, rich_documents)

    report = st.session_state.report
    if report is None:
        st.info("Choose a corpus directory and run a scan.")
        return

    render_statistics(report)
    st.download_button(
        label="📥 Download Markdown Report",
        data=render_markdown(report),
        file_name=Config.REPORT_PATH,
        mime="text/markdown",
    )
    st.divider()

    tab1, tab2, tab3 = st.tabs(["⚠️ Direct Conflicts", "🧩 Similar Contexts", "📊 Facts"])

    with tab1:
        if not report.direct_conflicts:
            st.success("✅ No conflicting numbers under identical contexts.")
        for i, conflict in enumerate(report.direct_conflicts):
            render_conflict_card(conflict, i)

    with tab2:
        st.caption("May be ranges or different phases; review before treating as errors.")
        if not report.similar_context_conflicts:
            st.success("✅ No conflicting numbers under similar contexts.")
        for i, conflict in enumerate(report.similar_context_conflicts):
            render_conflict_card(conflict, i)

    with tab3:
        render_facts_tab()


if __name__ == "__main__":
    main()
