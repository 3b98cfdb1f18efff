import numbers
import pandas as pd
import streamlit as st

from migasto.app.naming_conventions import TransactionsTableFields, CATEGORY_ICONS
from migasto.app.services.transactions_service import TransactionsService
from migasto.app.utils.aggregations import coerce_amounts
from migasto.app.utils.formatting import format_currency


id_col = TransactionsTableFields.ID.value
date_col = TransactionsTableFields.DATE.value
category_col = TransactionsTableFields.CATEGORY.value
desc_col = TransactionsTableFields.DESCRIPTION.value


@st.dialog("¿Eliminar transacción?")
def show_delete_transaction_dialog(service: TransactionsService, id_) -> None:
    """
    Simple confirmation dialog to delete a transaction.
    """
    yes_col, no_col = st.columns([1, 1])
    if yes_col.button("Sí", key=f"delete_{id_}_confirm", use_container_width=True):
        # on failure the error message stays on the service for the page to show after the rerun
        service.delete_transaction(id_)
        st.rerun()
    if no_col.button("No", key=f"delete_{id_}_cancel", use_container_width=True):
        st.rerun()


def render_transactions_table(service: TransactionsService, transactions: pd.DataFrame, title: str,
                              key: str, total_label: str | None = None) -> None:
    """
    Render a table of transactions with a delete button for each row. transactions without an id can not be
    deleted.

    Parameters
    ----------
    service : TransactionsService
        the transactions service of the session, used to delete transactions
    transactions : pd.DataFrame
        the transactions to display, in display order
    title : str
        the title of the table
    key : str
        a prefix for the widgets keys
    total_label : str | None
        if given, a footer with this label and the sum of the amounts is shown under the table
    """
    st.subheader(title)
    if transactions.empty:
        st.caption("Sin transacciones en este período")
        return

    widths = [2, 3, 2, 4, 1]
    for col, header in zip(st.columns(widths), ["Fecha", "Categoría", "Monto", "Descripción", ""]):
        col.markdown(f"**{header}**")

    amounts = coerce_amounts(transactions)
    for position, ((_, row), amount) in enumerate(zip(transactions.iterrows(), amounts)):
        date_, category, amount_, desc, delete = st.columns(widths)
        date_.write(row[date_col] if isinstance(row[date_col], str) else "-")
        category_text = row[category_col] if isinstance(row[category_col], str) else "-"
        category.write(f"{CATEGORY_ICONS.get(category_text, '')} {category_text}".strip())
        amount_.write(f"$ {format_currency(amount)}")
        desc.write(row[desc_col] if isinstance(row[desc_col], str) and row[desc_col] else "-")
        id_ = row[id_col]
        has_id = isinstance(id_, (str, numbers.Integral)) and not isinstance(id_, bool) and str(id_) != ''
        # keyed by position, ids may be missing or repeated
        delete.button(
            "🗑️",
            key=f"{key}_delete_{position}",
            help="Eliminar",
            on_click=show_delete_transaction_dialog,
            args=(service, id_),
            disabled=not has_id,
        )

    if total_label:
        st.markdown(f"**{total_label}:** $ {format_currency(amounts.sum())}")
