import streamlit as st

from migasto.app.utils.data import get_transactions_service, reset_transactions_service, show_pending_error
from migasto.app.utils.settings import load_settings, save_settings, load_token, save_token


############################################################################################################
# UI
############################################################################################################
st.title('Ajustes')
st.write("Configura la conexión con el backend. El token se envía en cada solicitud como "
         "`Authorization: Bearer <token>`.")

settings = load_settings()

with st.form(key='backend_settings_form'):
    backend_url = st.text_input('URL del backend', value=settings['backend_url'])
    request_timeout = st.number_input('Tiempo de espera (segundos)', min_value=1, value=max(1, int(settings['request_timeout'])))
    token = st.text_input('Token', value=load_token() or '', type='password')
    submitted = st.form_submit_button('Guardar')

if submitted:
    if not backend_url.strip():
        st.error('La URL del backend no puede estar vacía')
    else:
        settings.update(backend_url=backend_url.strip(), request_timeout=int(request_timeout))
        save_settings(settings)
        save_token(token or None)
        reset_transactions_service()
        st.success('Ajustes guardados')

if st.button('Recargar datos'):
    service = get_transactions_service()
    if service.refresh():
        st.success('Datos actualizados')
    else:
        show_pending_error(service)
