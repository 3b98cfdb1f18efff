import streamlit as st

from migasto.app.components.export_buttons import render_export_buttons
from migasto.app.components.period_selector import render_period_selector
from migasto.app.naming_conventions import MONTH_NAMES, INCOME, EXPENSE, BALANCE
from migasto.app.utils.aggregations import count_by_type
from migasto.app.utils.data import get_transactions_service, show_pending_error
from migasto.app.utils.formatting import format_currency
from migasto.app.utils.plotting import pie_plot_income_vs_expense, pie_plot_by_categories


service = get_transactions_service()
show_pending_error(service)

st.title("MiGasto")
st.caption("Panel financiero · corporativo")

render_period_selector(service)
render_export_buttons(service)

st.subheader(f"Resumen de {MONTH_NAMES[service.month - 1]} {service.year}")
income_col, expense_col, balance_col = st.columns(3)
counts = count_by_type(service.period_transactions)
income_col.metric("Ingresos", f"$ {format_currency(service.totals[INCOME])}")
income_col.caption(f"{counts[INCOME]} transacciones")
expense_col.metric("Gastos", f"$ {format_currency(service.totals[EXPENSE])}")
expense_col.caption(f"{counts[EXPENSE]} transacciones")
balance_col.metric("Balance", f"$ {format_currency(service.totals[BALANCE])}")

totals_chart_col, categories_chart_col = st.columns(2)
with totals_chart_col:
    st.plotly_chart(pie_plot_income_vs_expense(service.totals), key="income_vs_expense_pie")
with categories_chart_col:
    st.plotly_chart(pie_plot_by_categories(service.category_breakdown), key="categories_pie")
