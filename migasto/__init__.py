import os


__version__ = "0.1.0"


SRC_PATH = os.path.dirname(os.path.abspath(__file__))
USER_DIR = os.path.join(os.path.expanduser('~'), '.migasto')
SETTINGS_PATH = os.path.join(USER_DIR, 'settings.yaml')
CREDENTIALS_PATH = os.path.join(USER_DIR, 'credentials.yaml')

DEFAULT_BACKEND_URL = 'https://apimisgastos.onrender.com/api'
DEFAULT_REQUEST_TIMEOUT = 30
APP_NAME = 'MiGasto'
