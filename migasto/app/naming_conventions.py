from enum import Enum
from typing import Type

TOTAL = 'total'
MONTH = 'month'
MONTH_LABEL = 'month_label'
INCOME = 'income'
EXPENSE = 'expense'
BALANCE = 'balance'

MONTH_NAMES = [
    'Enero', 'Febrero', 'Marzo', 'Abril', 'Mayo', 'Junio',
    'Julio', 'Agosto', 'Septiembre', 'Octubre', 'Noviembre', 'Diciembre'
]


def create_enum(name: str, fields: list[tuple[str, str]]) -> Type[Enum]:
    return Enum(name, fields)


fields = [
    ('ID', 'id'),
    ('TYPE', 'type'),
    ('CATEGORY', 'category'),
    ('AMOUNT', 'amount'),
    ('DATE', 'date'),
    ('DESCRIPTION', 'description'),
]

TransactionsTableFields = create_enum('TransactionsTableFields', fields)


class TransactionTypes(Enum):
    INCOME = 'income'
    EXPENSE = 'expense'


class ExpenseCategories(Enum):
    FOOD = 'Comida'
    TRANSPORT = 'Transporte'
    HEALTH = 'Salud'
    ENTERTAINMENT = 'Entretenimiento'
    EDUCATION = 'Educación'
    HOME = 'Hogar'
    OTHER = 'Otros'


class IncomeCategories(Enum):
    SALARY = 'Sueldo'
    EXTRA_MONEY = 'Dinero Extra'
    SALES = 'Ventas'
    INVESTMENTS = 'Inversiones'
    GIFTS = 'Regalos'
    INTEREST = 'Intereses'
    OTHER = 'Otros'


class ExportFields(Enum):
    DATE = 'Fecha'
    TYPE = 'Tipo'
    CATEGORY = 'Categoría'
    AMOUNT = 'Monto'
    DESCRIPTION = 'Descripción'


TYPE_LABELS = {
    TransactionTypes.INCOME.value: 'Ingreso',
    TransactionTypes.EXPENSE.value: 'Gasto',
}

CATEGORY_ICONS = {
    'Comida': '🍔',
    'Transporte': '🚌',
    'Sueldo': '💼',
    'Salud': '💊',
    'Entretenimiento': '🎮',
    'Educación': '📚',
    'Hogar': '🏠',
    'Otros': '✨',
    'Dinero Extra': '💸',
    'Ventas': '🛍️',
    'Inversiones': '📈',
    'Regalos': '🎁',
    'Intereses': '🏦',
}

CHART_COLORS = ['#0b66ff', '#0ec27b', '#ffc107', '#ff5b6e', '#6f42c1', '#17a2b8']
INCOME_COLOR = '#0ec27b'
EXPENSE_COLOR = '#ff5b6e'


def recommended_categories(type_: str) -> list[str]:
    """Return the categories suggested by the input form for the given transaction type."""
    if type_ == TransactionTypes.INCOME.value:
        return [category.value for category in IncomeCategories]
    return [category.value for category in ExpenseCategories]
