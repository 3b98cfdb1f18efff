import streamlit as st

from migasto.app.services.transactions_service import TransactionsService


SERVICE_KEY = 'transactions_service'


def get_transactions_service() -> TransactionsService:
    """
    Get the transactions service of the current session. The service is created and loaded with the transactions
    from the backend the first time it is requested.

    Returns
    -------
    TransactionsService
        the transactions service of the session
    """
    if SERVICE_KEY not in st.session_state:
        service = TransactionsService()
        service.refresh()
        st.session_state[SERVICE_KEY] = service
    return st.session_state[SERVICE_KEY]


def reset_transactions_service() -> None:
    """Drop the transactions service of the session, the next request creates a new one with the current settings"""
    st.session_state.pop(SERVICE_KEY, None)


def show_pending_error(service: TransactionsService) -> None:
    """Display the pending error message of the service, if there is one"""
    message = service.consume_error()
    if message:
        st.error(message, icon="⚠️")
