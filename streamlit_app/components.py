"""
Small UI pieces shared by the pages: flash messages that survive a rerun,
summary cards and status badges.
"""
import html
from typing import Optional

import pandas as pd
import streamlit as st

FLASH_KEY = "flash"

CARD_CSS = """
    <style>
    .status-card {
        text-align: left;
        padding: 20px;
        background-color: rgba(255, 255, 255, 0.04);
        border: 1px solid rgba(255, 255, 255, 0.08);
        border-radius: 12px;
        margin-bottom: 20px;
    }
    .status-title {
        font-size: 12px;
        letter-spacing: 0.08em;
        text-transform: uppercase;
        color: #cbd5e1;
        margin: 0 0 6px 0;
    }
    .status-value {
        font-size: 22px;
        font-weight: 600;
        color: #f8fafc;
        margin: 0 0 6px 0;
    }
    .status-text {
        font-size: 14px;
        color: #cbd5e1;
        margin: 0;
    }
    .badge {
        display: inline-block;
        padding: 4px 10px;
        border-radius: 999px;
        font-size: 11px;
        font-weight: 600;
        letter-spacing: 0.04em;
    }
    .badge-success {
        background: rgba(16, 185, 129, 0.15);
        color: #10b981;
        border: 1px solid rgba(16, 185, 129, 0.35);
    }
    .badge-warning {
        background: rgba(245, 158, 11, 0.15);
        color: #f59e0b;
        border: 1px solid rgba(245, 158, 11, 0.35);
    }
    .badge-danger {
        background: rgba(239, 68, 68, 0.15);
        color: #ef4444;
        border: 1px solid rgba(239, 68, 68, 0.35);
    }
    </style>
"""

BADGE_CLASSES = {
    "Done": "badge-success",
    "Paid": "badge-success",
    "In Progress": "badge-warning",
    "Pending": "badge-warning",
    "Overdue": "badge-danger",
}


def inject_css() -> None:
    st.markdown(CARD_CSS, unsafe_allow_html=True)


def flash(message: str) -> None:
    """Show ``message`` as a success banner on the next run."""
    st.session_state[FLASH_KEY] = message


def show_flash() -> None:
    message = st.session_state.pop(FLASH_KEY, None)
    if message:
        st.success(message)


def show_messages(screen) -> None:
    if screen.error:
        st.error(screen.error)
    if screen.success:
        st.success(screen.success)


def stat_card(title: str, value: str, text: Optional[str] = None) -> None:
    title, value = html.escape(title), html.escape(value)
    text = html.escape(text) if text else "&nbsp;"
    st.markdown(
        f"""
        <div class="status-card">
            <p class="status-title">{title}</p>
            <p class="status-value">{value}</p>
            <p class="status-text">{text}</p>
        </div>
        """,
        unsafe_allow_html=True,
    )


def badge(status: str) -> str:
    css_class = BADGE_CLASSES.get(status, "badge-warning")
    return f'<span class="badge {css_class}">{html.escape(status)}</span>'


def records_table(records, columns) -> None:
    """Render pydantic records as a read-only table with the given ``{field: label}`` columns."""
    if not records:
        return
    df = pd.DataFrame([record.model_dump(mode="json") for record in records])
    df = df.reindex(columns=list(columns)).rename(columns=columns)
    st.dataframe(df, use_container_width=True, hide_index=True)


def money(amount: float) -> str:
    return f"₹{amount:,.2f}"
