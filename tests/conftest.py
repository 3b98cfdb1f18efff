import itertools
import pytest
import pandas as pd

from typing import Callable

from migasto.app.data_access.exceptions import BackendError
from migasto.app.data_access.transactions_repository import transactions_to_df
from migasto.app.naming_conventions import ExpenseCategories, IncomeCategories


class InMemoryTransactionsRepository:
    """A stand-in for the backend that keeps the transactions in a list"""
    def __init__(self, records: list[dict] | None = None):
        self.records = [dict(record) for record in records or []]
        self.fail = False
        self._ids = itertools.count(1000)

    def _check(self):
        if self.fail:
            raise BackendError("backend unreachable")

    def get_transactions(self) -> pd.DataFrame:
        self._check()
        return transactions_to_df([dict(record) for record in self.records])

    def add_transaction(self, payload: dict) -> dict:
        self._check()
        record = {'id': str(next(self._ids)), **payload}
        self.records.append(record)
        return record

    def delete_transaction(self, id_) -> None:
        self._check()
        self.records = [record for record in self.records if record.get('id') != id_]


class DataFixtures:
    @pytest.fixture(scope='function')
    def transactions_records(self) -> list[dict]:
        """a small set of transactions spread over a few months of 2024"""
        return [
            {'id': '1', 'type': 'income', 'category': 'Sueldo', 'amount': 1500.0, 'date': '2024-03-01',
             'description': 'sueldo marzo'},
            {'id': '2', 'type': 'expense', 'category': 'Comida', 'amount': 50.0, 'date': '2024-03-01',
             'description': ''},
            {'id': '3', 'type': 'expense', 'category': 'Transporte', 'amount': 20.25, 'date': '2024-03-05',
             'description': None},
            {'id': '4', 'type': 'expense', 'category': 'Comida', 'amount': 25.5, 'date': '2024-03-10',
             'description': 'almuerzo'},
            {'id': '5', 'type': 'income', 'category': 'Ventas', 'amount': 300.0, 'date': '2024-04-02',
             'description': 'venta bicicleta'},
            {'id': '6', 'type': 'expense', 'category': 'Hogar', 'amount': 80.0, 'date': '2024-04-15',
             'description': 'luz'},
            {'id': '7', 'type': 'expense', 'category': 'Salud', 'amount': 12.0, 'date': '2023-03-20',
             'description': 'farmacia'},
        ]

    @pytest.fixture(scope='function')
    def transactions_data(self, transactions_records) -> pd.DataFrame:
        return transactions_to_df(transactions_records)

    @pytest.fixture(scope='function')
    def in_memory_repository(self, transactions_records) -> InMemoryTransactionsRepository:
        return InMemoryTransactionsRepository(transactions_records)

    @pytest.fixture(scope='function')
    def fake_transactions_data_maker(self, faker) -> Callable:
        """
        return a function that creates fake transactions for various testing purposes
        """
        categories = {
            'income': [category.value for category in IncomeCategories],
            'expense': [category.value for category in ExpenseCategories],
        }

        def example_data(length: int = 10, year: int = 2024) -> pd.DataFrame:
            records = []
            for i in range(length):
                type_ = faker.random_element(['income', 'expense'])
                records.append({
                    'id': str(i),
                    'type': type_,
                    'category': faker.random_element(categories[type_]),
                    'amount': round(faker.pyfloat(min_value=0, max_value=5000, right_digits=2), 2),
                    'date': faker.date_between_dates(
                        date_start=pd.Timestamp(year, 1, 1).date(), date_end=pd.Timestamp(year, 12, 31).date()
                    ).isoformat(),
                    'description': faker.sentence(nb_words=3),
                })
            return transactions_to_df(records)
        return example_data
