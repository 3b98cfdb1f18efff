"""
this page lets the user add a new income or expense transaction.
the transaction is saved in the backend and the data is reloaded right after, so the other pages show it.
"""
import streamlit as st

from migasto.app.components.transaction_form import TransactionForm
from migasto.app.utils.data import get_transactions_service, show_pending_error


service = get_transactions_service()
show_pending_error(service)

st.title("Agregar transacción")
TransactionForm(service).render()
