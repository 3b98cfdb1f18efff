import math
import streamlit as st

from datetime import date

from migasto.app.naming_conventions import (
    TransactionTypes,
    CATEGORY_ICONS,
    TYPE_LABELS,
    MONTH_NAMES,
    BALANCE,
    recommended_categories,
)
from migasto.app.services.transactions_service import TransactionsService
from migasto.app.utils.formatting import format_currency


CUSTOM_CATEGORY = 'Otra...'


def _category_label(category: str) -> str:
    icon = CATEGORY_ICONS.get(category)
    return f"{icon} {category}" if icon else category


def projected_balance(balance: float, type_: str, amount) -> float:
    """
    Get the balance of the period after adding a transaction of the given type and amount. a missing or non
    numeric amount is ignored.
    """
    try:
        amount = float(amount)
    except (TypeError, ValueError):
        return balance
    if not math.isfinite(amount):
        return balance
    return balance + amount if type_ == TransactionTypes.INCOME.value else balance - amount


class TransactionForm:
    """
    Form for adding a new transaction. The category options depend on the selected type, and a free text category
    can be typed in instead of the recommended ones. While typing, the form previews the balance of the selected
    period with the new transaction and the month it will be added to.
    """
    def __init__(self, service: TransactionsService, key: str = 'new_transaction'):
        self.service = service
        self.key = key

    @property
    def amount_key(self) -> str:
        return f"{self.key}_amount"

    @property
    def description_key(self) -> str:
        return f"{self.key}_description"

    @property
    def message_key(self) -> str:
        return f"{self.key}_message"

    def render(self) -> None:
        type_ = st.radio(
            "Tipo",
            [TransactionTypes.EXPENSE.value, TransactionTypes.INCOME.value],
            format_func=lambda t: ('💸 ' if t == TransactionTypes.EXPENSE.value else '💰 ') + TYPE_LABELS[t],
            horizontal=True,
            key=f"{self.key}_type",
        )
        category = st.selectbox(
            "Categoría",
            recommended_categories(type_) + [CUSTOM_CATEGORY],
            format_func=lambda c: c if c == CUSTOM_CATEGORY else _category_label(c),
            key=f"{self.key}_{type_}_category",
        )
        if category == CUSTOM_CATEGORY:
            category = st.text_input("Nueva categoría", key=f"{self.key}_custom_category")

        amount_col, date_col = st.columns([1, 1])
        amount = amount_col.number_input("Monto", min_value=0.0, value=None, step=0.01, format="%.2f",
                                         placeholder="0,00", key=self.amount_key)
        date_ = date_col.date_input("Fecha", value=date.today(), format="DD/MM/YYYY", key=f"{self.key}_date")
        description = st.text_input("Descripción (opcional)", key=self.description_key)

        preview = projected_balance(self.service.totals[BALANCE], type_, amount)
        st.markdown(f"Vista previa: **$ {format_currency(preview)}**")
        if isinstance(date_, date):
            st.caption(f"Añadida en: {MONTH_NAMES[date_.month - 1]} {date_.year}")

        save_col, reset_col = st.columns([3, 1])
        save_col.button("Guardar", key=f"{self.key}_save", type="primary", use_container_width=True,
                        on_click=self._submit, args=(type_, category, amount, date_, description))
        reset_col.button("Reset", key=f"{self.key}_reset", use_container_width=True, on_click=self._reset)

        message = st.session_state.pop(self.message_key, None)
        if message is not None:
            is_error, text = message
            if is_error:
                st.error(text)
            else:
                st.success(text)

    def _reset(self) -> None:
        st.session_state[self.amount_key] = None
        st.session_state[self.description_key] = ""

    def _submit(self, type_: str, category: str, amount, date_, description: str) -> None:
        # runs as a button callback, the result is shown by the next render
        if amount is not None:
            # number_input returns a float, keep only the 2 decimals it displays
            amount = round(amount, 2)
        is_valid, msg = self.service.validate_transaction_inputs(type_, category, amount, date_)
        if not is_valid:
            st.session_state[self.message_key] = (True, msg)
            return

        if self.service.add_transaction(type_, category, amount, date_, description):
            st.session_state[self.message_key] = (False, "Transacción guardada")
            self._reset()
        else:
            st.session_state[self.message_key] = (True, self.service.consume_error())
