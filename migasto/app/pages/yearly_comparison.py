"""
this page compares the income and expenses of every month of the selected year.
"""
import streamlit as st

from migasto.app.components.period_selector import available_years
from migasto.app.naming_conventions import MONTH_LABEL, INCOME, EXPENSE
from migasto.app.utils.data import get_transactions_service, show_pending_error
from migasto.app.utils.formatting import format_currency
from migasto.app.utils.plotting import bar_plot_yearly_comparison


service = get_transactions_service()
show_pending_error(service)

st.title("Comparativa Anual")

years = available_years(service.year)
year_ = st.selectbox("Año", years, index=years.index(service.year))
if year_ != service.year:
    service.set_filter(year_, service.month)

st.plotly_chart(bar_plot_yearly_comparison(service.yearly_series, service.year), key="yearly_comparison_bar")

table = service.yearly_series[[MONTH_LABEL, INCOME, EXPENSE]].rename(
    columns={MONTH_LABEL: "Mes", INCOME: "Ingresos", EXPENSE: "Gastos"}
)
for col in ["Ingresos", "Gastos"]:
    table[col] = table[col].map(format_currency)
st.dataframe(table, hide_index=True, use_container_width=True)
