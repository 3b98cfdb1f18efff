import pytest
import requests

from unittest.mock import MagicMock

from migasto.app.data_access.exceptions import BackendError
from migasto.app.data_access.transactions_repository import TransactionsRepository, transactions_to_df


def make_response(status_code: int = 200, json_data=None, content: bytes = b'[]') -> MagicMock:
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.content = content
    response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    return response


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=requests.Session)


def make_repository(session, token: str | None = 'my_token') -> TransactionsRepository:
    return TransactionsRepository(base_url='https://backend.test/api/', timeout=5, token_loader=lambda: token,
                                  session=session)


class TestTransactionsRepository:
    def test_get_transactions(self, session):
        session.request.return_value = make_response(json_data=[
            {'id': 'a1', 'type': 'expense', 'category': 'Comida', 'amount': 50, 'date': '2024-03-01',
             'description': 'pan', '__v': 0},
            {'id': 'a2', 'type': 'income', 'category': 'Sueldo', 'amount': '1000.00', 'date': '2024-03-02'},
        ])
        df = make_repository(session).get_transactions()

        session.request.assert_called_once_with(
            'GET', 'https://backend.test/api/transactions', headers={'Authorization': 'Bearer my_token'}, timeout=5
        )
        assert list(df.columns) == ['id', 'type', 'category', 'amount', 'date', 'description']
        assert df['id'].to_list() == ['a1', 'a2']

    def test_request_without_token_is_unauthenticated(self, session):
        session.request.return_value = make_response(json_data=[])
        make_repository(session, token=None).get_transactions()
        assert session.request.call_args.kwargs['headers'] == {}

    def test_token_is_read_on_every_request(self, session):
        tokens = iter(['first', 'second'])
        session.request.return_value = make_response(json_data=[])
        repo = TransactionsRepository(base_url='https://backend.test/api', timeout=5,
                                      token_loader=lambda: next(tokens), session=session)
        repo.get_transactions()
        repo.get_transactions()
        assert [call.kwargs['headers'] for call in session.request.call_args_list] == [
            {'Authorization': 'Bearer first'}, {'Authorization': 'Bearer second'}
        ]

    def test_empty_body_is_no_transactions(self, session):
        session.request.return_value = make_response(json_data=None)
        assert make_repository(session).get_transactions().empty

    def test_non_success_status_raises(self, session):
        session.request.return_value = make_response(status_code=500)
        with pytest.raises(BackendError):
            make_repository(session).get_transactions()

    def test_connection_error_raises(self, session):
        session.request.side_effect = requests.ConnectionError("unreachable")
        with pytest.raises(BackendError):
            make_repository(session).get_transactions()

    def test_invalid_json_raises(self, session):
        response = make_response()
        response.json.side_effect = ValueError("not json")
        session.request.return_value = response
        with pytest.raises(BackendError):
            make_repository(session).get_transactions()

    def test_non_list_body_raises(self, session):
        session.request.return_value = make_response(json_data={'error': 'unauthorized'})
        with pytest.raises(BackendError):
            make_repository(session).get_transactions()

    def test_add_transaction(self, session):
        payload = {'type': 'income', 'category': 'Sueldo', 'amount': 1000.0, 'date': '2024-03-15',
                   'description': ''}
        session.request.return_value = make_response(status_code=201, json_data={'id': 'x', **payload},
                                                     content=b'{}')
        created = make_repository(session).add_transaction(payload)

        session.request.assert_called_once_with(
            'POST', 'https://backend.test/api/transactions', headers={'Authorization': 'Bearer my_token'},
            timeout=5, json=payload
        )
        assert created['id'] == 'x'

    def test_add_transaction_without_body(self, session):
        session.request.return_value = make_response(status_code=204, content=b'')
        assert make_repository(session).add_transaction({'type': 'expense'}) == {}

    def test_delete_transaction(self, session):
        session.request.return_value = make_response(status_code=204, content=b'')
        make_repository(session).delete_transaction('a1')
        session.request.assert_called_once_with(
            'DELETE', 'https://backend.test/api/transactions/a1', headers={'Authorization': 'Bearer my_token'},
            timeout=5
        )

    def test_delete_failure_raises(self, session):
        session.request.return_value = make_response(status_code=404)
        with pytest.raises(BackendError):
            make_repository(session).delete_transaction('missing')

    def test_default_settings_are_used(self, session, monkeypatch):
        monkeypatch.setattr(
            'migasto.app.data_access.transactions_repository.load_settings',
            lambda: {'backend_url': 'https://configured.test/api', 'request_timeout': 12, 'log_level': 'INFO'}
        )
        repo = TransactionsRepository(token_loader=lambda: None, session=session)
        assert repo.base_url == 'https://configured.test/api'
        assert repo.timeout == 12


def test_integer_ids_survive_a_record_without_id(session):
    session.request.side_effect = [
        make_response(json_data=[
            {'id': 5, 'type': 'expense', 'category': 'Comida', 'amount': 1, 'date': '2024-03-01'},
            {'type': 'expense', 'category': 'Comida', 'amount': 2, 'date': '2024-03-02'},
        ]),
        make_response(status_code=204, content=b''),
    ]
    repo = make_repository(session)
    df = repo.get_transactions()
    assert df.loc[0, 'id'] == 5
    assert not isinstance(df.loc[0, 'id'], float)
    assert df.loc[1, 'id'] is None

    repo.delete_transaction(df.loc[0, 'id'])
    assert session.request.call_args.args == ('DELETE', 'https://backend.test/api/transactions/5')


def test_transactions_to_df_fills_missing_fields():
    df = transactions_to_df([{'id': '1', 'amount': 3}, 'not a transaction'])
    assert len(df) == 1
    assert df.loc[0, 'amount'] == 3
    assert df['date'].isna().all()
