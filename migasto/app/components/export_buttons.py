import streamlit as st

from migasto.app.services.transactions_service import TransactionsService
from migasto.app.utils.export import export_file_name, transactions_to_excel, transactions_to_pdf
from migasto.logging_setup import get_logger


logger = get_logger(__name__)

EXPORT_FORMATS = {
    'xlsx': ('Excel', transactions_to_excel, 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'),
    'pdf': ('PDF', transactions_to_pdf, 'application/pdf'),
}


def render_export_buttons(service: TransactionsService) -> None:
    """
    Render a download button for every export format, each exporting the transactions of the selected period.
    """
    for col, (extension, (label, exporter, mime)) in zip(st.columns(len(EXPORT_FORMATS)), EXPORT_FORMATS.items()):
        try:
            data = exporter(service.period_transactions, service.year, service.month)
        except Exception as e:
            logger.exception('failed to generate %s export', extension)
            col.error(f"Error al generar {label}: {e}")
            continue
        col.download_button(
            f"⬇️ {label}",
            data=data,
            file_name=export_file_name(service.year, service.month, extension),
            mime=mime,
            key=f"export_{extension}",
            use_container_width=True,
        )
