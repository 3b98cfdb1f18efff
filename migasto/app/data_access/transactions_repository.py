import pandas as pd
import requests

from typing import Callable

from migasto.app.data_access.exceptions import BackendError
from migasto.app.naming_conventions import TransactionsTableFields
from migasto.app.utils.aggregations import transactions_columns, id_col
from migasto.app.utils.settings import load_settings, load_token
from migasto.logging_setup import get_logger


logger = get_logger(__name__)


def transactions_to_df(records: list[dict]) -> pd.DataFrame:
    """
    Convert the transactions returned by the backend into a transactions table.

    Parameters
    ----------
    records : list[dict]
        the transactions as returned by the backend

    Returns
    -------
    pd.DataFrame
        a DataFrame with the columns of ``TransactionsTableFields``. fields missing from a record are set to NaN and
        unknown fields are dropped
    """
    if not isinstance(records, list):
        raise BackendError(f"expected a list of transactions, got {type(records).__name__}")
    records = [record for record in records if isinstance(record, dict)]
    df = pd.DataFrame(records, columns=transactions_columns)
    # a record without an id would upcast the integer ids to float, 5 -> 5.0
    df[id_col] = pd.Series([record.get(id_col) for record in records], index=df.index, dtype=object)
    return df


class TransactionsRepository:
    resource = 'transactions'
    id_col = TransactionsTableFields.ID.value

    def __init__(self, base_url: str | None = None, timeout: float | None = None,
                 token_loader: Callable[[], str | None] = load_token, session: requests.Session | None = None):
        """
        Initializes the TransactionsRepository with the backend location.

        Parameters
        ----------
        base_url : str | None
            the base url of the backend api. defaults to the configured backend url
        timeout : float | None
            the timeout of every request in seconds. defaults to the configured request timeout
        token_loader : Callable[[], str | None]
            returns the authentication token, called before every request so a newly saved token is used right away
        session : requests.Session | None
            the session to send the requests with
        """
        settings = load_settings()
        self.base_url = (base_url or settings['backend_url']).rstrip('/')
        self.timeout = timeout if timeout is not None else settings['request_timeout']
        self.token_loader = token_loader
        self.session = session if session is not None else requests.Session()

    def _headers(self) -> dict[str, str]:
        token = self.token_loader()
        if token:
            return {'Authorization': f'Bearer {token}'}
        return {}

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f'{self.base_url}/{path}'
        try:
            response = self.session.request(method, url, headers=self._headers(), timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as e:
            raise BackendError(f'{method} {url} failed: {e}') from e
        logger.debug('%s %s -> %s', method, url, response.status_code)
        return response

    def get_transactions(self) -> pd.DataFrame:
        """
        Get all the transactions stored in the backend.

        Returns
        -------
        pd.DataFrame
            the transactions table

        Raises
        ------
        BackendError
            if the request fails, the backend answers with a non success status or the body is not a list of
            transactions
        """
        response = self._request('GET', self.resource)
        try:
            records = response.json()
        except ValueError as e:
            raise BackendError(f'invalid transactions response: {e}') from e
        return transactions_to_df(records if records is not None else [])

    def add_transaction(self, payload: dict) -> dict:
        """
        Create a new transaction, the backend assigns its id.

        Parameters
        ----------
        payload : dict
            the transaction fields: type, category, amount, date and description

        Returns
        -------
        dict
            the created transaction as returned by the backend, empty if the backend returns no body
        """
        response = self._request('POST', self.resource, json=payload)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}

    def delete_transaction(self, id_) -> None:
        """
        Delete a transaction by its id.

        Parameters
        ----------
        id_ : str | int
            the id of the transaction to delete
        """
        self._request('DELETE', f'{self.resource}/{id_}')
