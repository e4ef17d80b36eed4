"""
Streamlit UI for theater billing statements.

Features:
- Uses the configured play catalog and invoices, or uploaded JSON files
- Statement text, per-performance table and totals
- Pricing trace for every line
- Export of the statement lines to CSV
"""
import json
import sys
from pathlib import Path

import streamlit as st

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from theater_billing.config.settings import get_settings
from theater_billing.data.loaders import load_invoices, load_plays, parse_invoices, parse_plays
from theater_billing.engine import PricingEngine, StatementError, usd


st.set_page_config(
    page_title="Theater Billing",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_engine():
    """Get cached engine instance."""
    # Statement text is shown in a browser, not written to a platform file
    return PricingEngine(rates=get_settings().rates, line_separator="\n")


def read_upload(upload):
    """Decode an uploaded JSON file."""
    try:
        return json.loads(upload.getvalue().decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        st.error(f"{upload.name}: {e}")
        st.stop()


try:
    settings = get_settings()
    engine = get_engine()
except StatementError as e:
    st.error(f"System Error: {e}")
    st.stop()


# ============================================================================
# SIDEBAR: Data Sources
# ============================================================================
with st.sidebar:
    st.header("🎭 Data Sources")

    plays_upload = st.file_uploader("Play catalog (JSON)", type=["json"])
    invoices_upload = st.file_uploader("Invoices (JSON)", type=["json"])

    try:
        if plays_upload is not None:
            plays = parse_plays(read_upload(plays_upload), source=plays_upload.name)
        else:
            plays = load_plays(settings.plays_file)

        if invoices_upload is not None:
            invoices = parse_invoices(read_upload(invoices_upload), source=invoices_upload.name)
        else:
            invoices = load_invoices(settings.invoices_file)
    except StatementError as e:
        st.error(f"Data Error: {e}")
        st.stop()

    st.caption(f"**{len(plays)}** plays | **{len(invoices)}** invoices")

    with st.expander("📐 Rates"):
        st.json(engine.rates.to_dict())


# ============================================================================
# MAIN CONTENT
# ============================================================================
st.title("Theater Billing")

if not invoices:
    st.info("No invoices to show.")
    st.stop()

labels = [f"{i + 1}. {inv.customer} ({len(inv.performances)} performances)" for i, inv in enumerate(invoices)]
choice = st.selectbox("Invoice", options=range(len(invoices)), format_func=lambda i: labels[i])
invoice = invoices[choice]

try:
    result = engine.render_statement(invoice, plays)
except StatementError as e:
    st.error(f"Cannot render statement for {invoice.customer}: {e}")
    st.stop()

m1, m2, m3 = st.columns(3)
m1.metric("Amount Owed", usd(result.total_amount, engine.rates.minor_units_per_major))
m2.metric("Volume Credits", result.total_volume_credits)
m3.metric("Performances", len(result.lines))

col1, col2 = st.columns([1, 1], gap="large")

with col1:
    st.subheader("Statement")
    st.code(result.text, language=None)

with col2:
    st.subheader("Lines")
    df = result.to_frame()
    display_df = df.copy()
    display_df['amount'] = display_df['amount'].map(engine.formatter)
    st.dataframe(display_df, use_container_width=True, hide_index=True)

    st.download_button(
        "📥 CSV",
        data=df.to_csv(index=False),
        file_name=f"statement_{invoice.customer}.csv",
        mime="text/csv",
    )

with st.expander("🔍 Pricing Details"):
    for line in result.lines:
        st.markdown(f"**{line.play_name}** ({line.audience} seats)")
        st.text(line.get_trace_text())
