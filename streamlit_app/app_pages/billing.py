import datetime as dt

import streamlit as st

from components import badge, flash, inject_css, money, records_table, show_flash, stat_card
from role_guard import go
from society.context import AppContext
from society.schemas.bill import BillStatus
from society.screens import BillingScreen, CreateBillScreen, ResidentBillingScreen

STATUS_OPTIONS = [status.value for status in BillStatus]

COLUMNS = {
    "memberName": "Member",
    "amount": "Amount",
    "dueDate": "Due date",
    "status": "Status",
}


def render_billing(ctx: AppContext):
    st.title("💰 Billing")
    inject_css()
    show_flash()

    screen = BillingScreen(ctx).load()
    if screen.error:
        st.error(screen.error)
        return

    col1, col2 = st.columns([3, 1])
    with col1:
        stat_card("Outstanding", money(screen.unpaid_total), f"{len(screen.items)} bills issued")
    with col2:
        if st.button("🧾 New bill", use_container_width=True):
            go("/create-new-bill")

    if not screen.items:
        st.info("No bills have been issued yet.")
        return

    for bill in screen.items:
        with st.container(border=True):
            c1, c2, c3, c4 = st.columns([3, 2, 2, 2])
            c1.markdown(f"**{bill.memberName}**")
            c2.write(money(bill.amount))
            c3.caption(f"Due {bill.dueDate:%d %b %Y}")
            c4.markdown(badge(bill.status.value), unsafe_allow_html=True)
            new_status = c4.selectbox(
                "Status",
                STATUS_OPTIONS,
                index=STATUS_OPTIONS.index(bill.status.value),
                key=f"bill_status_{bill.id}",
                label_visibility="collapsed",
            )
            if new_status != bill.status.value:
                if screen.update_status(bill.id, new_status):
                    flash(screen.success)
                    st.rerun()
                st.error(screen.error)


def render_resident_billing(ctx: AppContext):
    st.title("💰 My Bills")
    inject_css()

    screen = ResidentBillingScreen(ctx).load()
    if screen.error:
        st.error(screen.error)
        return

    stat_card("Amount due", money(screen.unpaid_total), "Pending and overdue")
    if not screen.items:
        st.info("You have no bills.")
        return
    records_table(screen.items, COLUMNS)


def render_create_bill(ctx: AppContext):
    st.title("🧾 Create New Bill")

    screen = CreateBillScreen(ctx).load()
    if screen.error:
        st.error(screen.error)
        return
    if not screen.members:
        st.info("No members to bill yet.")
        return

    labels = {f"{m.name} (Flat {m.flatNo})": m.id for m in screen.members}
    with st.form("create_bill_form"):
        member = st.selectbox("Member", list(labels), index=None, placeholder="Select a member")
        amount = st.number_input("Amount", min_value=0.0, step=100.0, format="%.2f")
        due_date = st.date_input("Due date", value=dt.date.today() + dt.timedelta(days=30))
        submitted = st.form_submit_button("Create bill")

    if submitted:
        if screen.create(labels.get(member), amount, due_date):
            flash(screen.success)
            go("/billing")
        st.error(screen.error)
