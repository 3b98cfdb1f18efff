"""
this page lists the transactions of the selected month, expenses and incomes in separate tables, newest first.
each transaction can be deleted after confirming.
"""
import streamlit as st

from migasto.app.components.period_selector import render_period_selector
from migasto.app.components.transactions_table import render_transactions_table
from migasto.app.utils.aggregations import split_by_type
from migasto.app.utils.data import get_transactions_service, show_pending_error


service = get_transactions_service()
show_pending_error(service)

st.title("Historial")
render_period_selector(service)

incomes, expenses = split_by_type(service.period_transactions)
expenses_col, incomes_col = st.columns(2)
with expenses_col:
    render_transactions_table(service, expenses, "Gastos", key="history_expenses", total_label="Total Gastos")
with incomes_col:
    render_transactions_table(service, incomes, "Ingresos", key="history_incomes", total_label="Total Ingresos")
