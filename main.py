import streamlit as st

from migasto.app.utils.settings import load_settings
from migasto.logging_setup import configure_logging


configure_logging(load_settings()['log_level'])

st.set_page_config(page_title="MiGasto", page_icon="💸", layout='wide')

pg = st.navigation(
    [
        st.Page("migasto/app/overview.py", title="Resumen", default=True),
        st.Page("migasto/app/pages/add_transaction.py", title="Agregar"),
        st.Page("migasto/app/pages/history.py", title="Historial"),
        st.Page("migasto/app/pages/yearly_comparison.py", title="Comparativa"),
        st.Page("migasto/app/pages/settings.py", title="Ajustes"),
    ]
)
pg.run()
