import streamlit as st

from datetime import datetime

from migasto.app.naming_conventions import MONTH_NAMES
from migasto.app.services.transactions_service import TransactionsService


def previous_period(year: int, month: int) -> tuple[int, int]:
    """Get the year and month of the month before the given one"""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_period(year: int, month: int) -> tuple[int, int]:
    """Get the year and month of the month after the given one"""
    if month == 12:
        return year + 1, 1
    return year, month + 1


def available_years(selected_year: int) -> list[int]:
    """The current year and the 4 previous ones, newest first, always including the selected year"""
    curr_year = datetime.now().year
    years = [curr_year - i for i in range(5)]
    if selected_year not in years:
        years.append(selected_year)
        years.sort(reverse=True)
    return years


def select_current_month(service: TransactionsService) -> None:
    now = datetime.now()
    service.set_filter(now.year, now.month)


def select_previous_month(service: TransactionsService) -> None:
    service.set_filter(*previous_period(service.year, service.month))


def select_next_month(service: TransactionsService) -> None:
    service.set_filter(*next_period(service.year, service.month))


def render_period_selector(service: TransactionsService, key: str = 'period') -> None:
    """
    This function creates a UI for selecting the year and month whose transactions are displayed. The selection is
    stored in the transactions service, so it is shared between all the pages.

    Parameters
    ----------
    service : TransactionsService
        the transactions service of the session
    key : str
        a prefix for the widgets keys, needed when the selector is rendered more than once in the same page
    """
    year_col, month_col, previous_col, current_col, next_col = st.columns([2, 2, 1, 1, 1])

    # the buttons run as callbacks so the selects below already show the new period
    previous_col.button("◀", key=f"{key}_previous_month", help="Mes anterior", on_click=select_previous_month,
                        args=(service,), use_container_width=True)
    current_col.button("Hoy", key=f"{key}_current_month", help="Mes actual", on_click=select_current_month,
                       args=(service,), use_container_width=True)
    next_col.button("▶", key=f"{key}_next_month", help="Mes siguiente", on_click=select_next_month,
                    args=(service,), use_container_width=True)

    years = available_years(service.year)
    year_ = year_col.selectbox("Año", years, index=years.index(service.year))
    month_ = month_col.selectbox(
        "Mes", range(1, 13), index=service.month - 1, format_func=lambda m: MONTH_NAMES[m - 1]
    )

    if (year_, month_) != (service.year, service.month):
        service.set_filter(year_, month_)
