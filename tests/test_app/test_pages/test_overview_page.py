import os
import pytest

from streamlit.testing.v1 import AppTest

from tests.conftest import DataFixtures
from migasto import SRC_PATH
from migasto.app.components import export_buttons
from migasto.app.services.transactions_service import TransactionsService
from migasto.app.utils.data import SERVICE_KEY


OVERVIEW_PAGE = os.path.join(SRC_PATH, 'app', 'overview.py')


class TestOverviewPage(DataFixtures):
    @pytest.fixture
    def app(self, in_memory_repository) -> AppTest:
        service = TransactionsService(in_memory_repository, year=2024, month=3)
        service.refresh()
        at = AppTest.from_file(OVERVIEW_PAGE, default_timeout=10)
        at.session_state[SERVICE_KEY] = service
        return at

    def test_summary(self, app):
        app.run()

        assert not app.exception
        assert [metric.value for metric in app.metric] == ["$ 1.500,00", "$ 95,75", "$ 1.404,25"]
        captions = [caption.value for caption in app.caption]
        assert "1 transacciones" in captions
        assert "3 transacciones" in captions

    def test_export_failure_shows_the_reason(self, app, monkeypatch):
        def failing_exporter(df, year, month):
            raise ValueError("fuente no disponible")

        monkeypatch.setitem(export_buttons.EXPORT_FORMATS, 'pdf', ('PDF', failing_exporter, 'application/pdf'))
        app.run()

        assert not app.exception
        assert [error.value for error in app.error] == ["Error al generar PDF: fuente no disponible"]
