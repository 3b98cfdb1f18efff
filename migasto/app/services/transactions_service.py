import datetime as dt
import math
import threading
import pandas as pd

from decimal import Decimal, InvalidOperation

from migasto.app.data_access.exceptions import BackendError
from migasto.app.data_access.transactions_repository import TransactionsRepository
from migasto.app.naming_conventions import TransactionsTableFields, TransactionTypes
from migasto.app.utils.aggregations import (
    empty_transactions,
    select_period,
    totals,
    category_breakdown,
    yearly_series,
)
from migasto.logging_setup import get_logger


logger = get_logger(__name__)

FETCH_ERROR_MESSAGE = 'Error al conectar al backend'
SAVE_ERROR_MESSAGE = 'Error al guardar'
DELETE_ERROR_MESSAGE = 'Error al eliminar'


class TransactionsService:
    """
    Holds the transactions fetched from the backend together with the selected period, and the metrics derived from
    them. The metrics are recomputed whenever the transactions or the period change, and every write to the backend
    is followed by a full refresh so the displayed data always matches the last successful read.
    """
    def __init__(self, repository: TransactionsRepository | None = None, year: int | None = None,
                 month: int | None = None):
        today = dt.date.today()
        self.transactions_repository = repository if repository is not None else TransactionsRepository()
        self.year = year if year is not None else today.year
        self.month = month if month is not None else today.month
        self.transactions: pd.DataFrame = empty_transactions()
        self.error_message: str | None = None

        self.period_transactions: pd.DataFrame = empty_transactions()
        self.totals: dict[str, float] = {}
        self.category_breakdown: pd.DataFrame = pd.DataFrame()
        self.yearly_series: pd.DataFrame = pd.DataFrame()

        self._lock = threading.Lock()
        self._refresh_generation = 0
        self._recompute()

    def _recompute(self) -> None:
        self.period_transactions = select_period(self.transactions, self.year, self.month)
        self.totals = totals(self.period_transactions)
        self.category_breakdown = category_breakdown(self.period_transactions)
        self.yearly_series = yearly_series(self.transactions, self.year)

    def set_filter(self, year: int, month: int) -> None:
        """
        Select the period to display.

        Parameters
        ----------
        year : int
            the year of the period
        month : int
            the month of the period, 1-12
        """
        if not 1 <= month <= 12:
            raise ValueError(f"month must be between 1 and 12, got {month}")
        self.year = int(year)
        self.month = int(month)
        self._recompute()

    def refresh(self) -> bool:
        """
        Fetch all the transactions from the backend and replace the cached ones.

        If another refresh started while this one was waiting for the backend, the response of this one is
        discarded so an older response never overwrites a newer one.

        Returns
        -------
        bool
            False if the fetch failed, in which case the cached transactions are kept and ``error_message`` is set.
            True otherwise
        """
        with self._lock:
            self._refresh_generation += 1
            generation = self._refresh_generation

        try:
            transactions = self.transactions_repository.get_transactions()
        except BackendError as e:
            logger.error('failed to fetch transactions: %s', e)
            with self._lock:
                if generation == self._refresh_generation:
                    self.error_message = FETCH_ERROR_MESSAGE
            return False

        with self._lock:
            if generation != self._refresh_generation:
                logger.debug('discarding stale transactions response (generation %d, latest %d)',
                             generation, self._refresh_generation)
                return True
            self.transactions = transactions
            self._recompute()
        logger.info('fetched %d transactions', len(transactions))
        return True

    def add_transaction(self, type_: str, category: str, amount, date_, description: str | None = None) -> bool:
        """
        Create a new transaction in the backend and refresh the cached transactions.

        Parameters
        ----------
        type_ : str
            the type of the transaction, "income" or "expense"
        category : str
            the category of the transaction
        amount : float | str
            the amount of the transaction, non-negative with at most 2 decimal places
        date_ : datetime.date | str
            the date of the transaction
        description : str | None
            an optional description

        Returns
        -------
        bool
            True if the transaction was saved and the transactions were refreshed, False otherwise. on failure
            ``error_message`` is set

        Raises
        ------
        ValueError
            if the inputs do not pass ``validate_transaction_inputs``
        """
        is_valid, msg = self.validate_transaction_inputs(type_, category, amount, date_)
        if not is_valid:
            raise ValueError(msg)

        payload = {
            TransactionsTableFields.TYPE.value: type_,
            TransactionsTableFields.CATEGORY.value: category.strip(),
            TransactionsTableFields.AMOUNT.value: round(float(amount), 2),
            TransactionsTableFields.DATE.value: _iso_date(date_),
            TransactionsTableFields.DESCRIPTION.value: (description or '').strip(),
        }
        try:
            self.transactions_repository.add_transaction(payload)
        except BackendError as e:
            logger.error('failed to save transaction: %s', e)
            self.error_message = SAVE_ERROR_MESSAGE
            return False

        logger.info('saved %s transaction of %.2f in %s', type_, payload['amount'], payload['category'])
        return self.refresh()

    def delete_transaction(self, id_) -> bool:
        """
        Delete a transaction from the backend and refresh the cached transactions.

        Parameters
        ----------
        id_ : str | int
            the id of the transaction to delete

        Returns
        -------
        bool
            True if the transaction was deleted and the transactions were refreshed, False otherwise. on failure
            ``error_message`` is set
        """
        try:
            self.transactions_repository.delete_transaction(id_)
        except BackendError as e:
            logger.error('failed to delete transaction %s: %s', id_, e)
            self.error_message = DELETE_ERROR_MESSAGE
            return False

        logger.info('deleted transaction %s', id_)
        return self.refresh()

    def consume_error(self) -> str | None:
        """Get the pending error message and clear it."""
        message, self.error_message = self.error_message, None
        return message

    @staticmethod
    def validate_transaction_inputs(type_: str, category: str, amount, date_) -> tuple[bool, str]:
        """
        This function verifies the values of a new transaction before saving it. The function returns an error
        message in any of the following cases:
        - the type is neither income nor expense
        - the category is empty
        - the amount is missing, not a number, negative or has more than 2 decimal places
        - the date is not a valid date

        Returns
        -------
        tuple[bool, str]
            whether the inputs are valid, and the error message if they are not
        """
        if type_ not in [t.value for t in TransactionTypes]:
            return False, f"Tipo de transacción inválido: {type_}"

        if not isinstance(category, str) or not category.strip():
            return False, "Selecciona una categoría"

        if amount is None or isinstance(amount, bool):
            return False, "Ingresa un monto"
        try:
            amount_dec = Decimal(str(amount).strip())
        except InvalidOperation:
            return False, "El monto debe ser un número"
        if not amount_dec.is_finite() or not math.isfinite(float(amount_dec)):
            return False, "El monto debe ser un número"
        if amount_dec < 0:
            return False, "El monto no puede ser negativo"
        if _decimal_places(amount_dec) > 2:
            return False, "El monto puede tener como máximo 2 decimales"

        if _iso_date(date_) is None:
            return False, "Ingresa una fecha válida"

        return True, ""


def _decimal_places(value: Decimal) -> int:
    # read from the digits, decimal arithmetic is bounded by the context precision
    _, digits, exponent = value.as_tuple()
    digits_text = ''.join(map(str, digits))
    trailing_zeros = len(digits_text) - len(digits_text.rstrip('0'))
    return max(0, -(exponent + trailing_zeros))


def _iso_date(value) -> str | None:
    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    if isinstance(value, dt.date):
        return value.isoformat()
    if isinstance(value, str):
        try:
            return dt.date.fromisoformat(value.strip()).isoformat()
        except ValueError:
            return None
    return None
