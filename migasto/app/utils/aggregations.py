"""
Pure aggregation functions over the transactions table.

Every function takes the transactions as a DataFrame with the columns of ``TransactionsTableFields`` and never
mutates it. Malformed records never raise: a row with an unparsable date is left out of every period and a row
with a non-numeric amount contributes 0.
"""
import re
import math
import datetime as dt
import pandas as pd

from migasto.app.naming_conventions import (
    TransactionsTableFields,
    TransactionTypes,
    MONTH_NAMES,
    TYPE_LABELS,
    TOTAL,
    MONTH,
    MONTH_LABEL,
    INCOME,
    EXPENSE,
    BALANCE,
)


id_col = TransactionsTableFields.ID.value
type_col = TransactionsTableFields.TYPE.value
category_col = TransactionsTableFields.CATEGORY.value
amount_col = TransactionsTableFields.AMOUNT.value
date_col = TransactionsTableFields.DATE.value
desc_col = TransactionsTableFields.DESCRIPTION.value
transactions_columns = [field.value for field in TransactionsTableFields]
_ISO_DATE = re.compile(r'^\d{4}-\d{2}-\d{2}')


def empty_transactions() -> pd.DataFrame:
    """Return an empty transactions table."""
    return pd.DataFrame(columns=transactions_columns)


def ensure_columns(df: pd.DataFrame) -> pd.DataFrame:
    missing = [col for col in transactions_columns if col not in df.columns]
    if not missing:
        return df
    df = df.copy()
    for col in missing:
        df[col] = None
    return df


def _date_text(value) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return None


def _sortable_date(value) -> str:
    # ISO dates sort lexicographically, anything else sorts as the oldest
    text = _date_text(value) or ''
    return text[:10] if _ISO_DATE.match(text) else ''


def _scalar(value):
    # lists and mappings sent by the backend are neither amounts nor categories
    return None if isinstance(value, (list, tuple, dict, set)) else value


def _category_text(value) -> str | None:
    if isinstance(value, str):
        return value
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    return str(value)


def _period_prefix(year: int, month: int) -> str:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    return f"{int(year):04d}-{int(month):02d}"


def coerce_amounts(df: pd.DataFrame) -> pd.Series:
    """
    Get the amounts of the transactions as floats.

    Parameters
    ----------
    df : pd.DataFrame
        the transactions

    Returns
    -------
    pd.Series
        the amount of each transaction, missing and non-numeric amounts are replaced with 0
    """
    df = ensure_columns(df)
    amounts = pd.to_numeric(df[amount_col].map(_scalar), errors='coerce').astype(float)
    return amounts.where(amounts.notna() & ~amounts.isin([float('inf'), float('-inf')]), 0.0)


def is_income(df: pd.DataFrame) -> pd.Series:
    """
    Boolean mask of the income transactions. Any transaction that is not income counts as an expense.
    """
    df = ensure_columns(df)
    return df[type_col] == TransactionTypes.INCOME.value


def select_period(df: pd.DataFrame, year: int, month: int) -> pd.DataFrame:
    """
    Select the transactions of a single calendar month.

    Parameters
    ----------
    df : pd.DataFrame
        the transactions
    year : int
        the year of the period
    month : int
        the month of the period, 1-12

    Returns
    -------
    pd.DataFrame
        the transactions whose date starts with "YYYY-MM", in their original order. transactions with a missing or
        malformed date are excluded
    """
    prefix = _period_prefix(year, month)
    df = ensure_columns(df)
    mask = df[date_col].map(lambda value: (_date_text(value) or '').startswith(prefix)).astype(bool)
    return df.loc[mask].copy()


def totals(df: pd.DataFrame) -> dict[str, float]:
    """
    Sum the income and the expenses of the given transactions.

    Returns
    -------
    dict[str, float]
        a dictionary with the keys "income", "expense" and "balance", where balance is income - expense. amounts are
        not rounded, round only when displaying
    """
    amounts = coerce_amounts(df)
    income_mask = is_income(df)
    income = float(amounts[income_mask].sum())
    expense = float(amounts[~income_mask].sum())
    return {INCOME: income, EXPENSE: expense, BALANCE: income - expense}


def category_breakdown(df: pd.DataFrame) -> pd.DataFrame:
    """
    Sum the expenses of each category.

    Parameters
    ----------
    df : pd.DataFrame
        the transactions

    Returns
    -------
    pd.DataFrame
        a DataFrame with the columns "category" and "total", one row per category with at least one expense, in the
        order each category first appears. categories are matched by their exact text, a category that is not a
        string (e.g. a list sent by the backend) is grouped by its text representation
    """
    df = ensure_columns(df)
    expenses_mask = ~is_income(df)
    expenses = pd.DataFrame({
        category_col: df.loc[expenses_mask, category_col].map(_category_text),
        TOTAL: coerce_amounts(df)[expenses_mask],
    })
    if expenses.empty:
        return pd.DataFrame({category_col: pd.Series(dtype=object), TOTAL: pd.Series(dtype=float)})
    breakdown = expenses.groupby(category_col, sort=False, dropna=False)[TOTAL].sum().reset_index()
    return breakdown


def yearly_series(df: pd.DataFrame, year: int) -> pd.DataFrame:
    """
    Compute the income and expenses of every month of the given year.

    Returns
    -------
    pd.DataFrame
        exactly 12 rows, January to December, with the columns "month", "month_label", "income" and "expense".
        months without transactions are zero-filled
    """
    rows = []
    for month in range(1, 13):
        month_totals = totals(select_period(df, year, month))
        rows.append({
            MONTH: month,
            MONTH_LABEL: MONTH_NAMES[month - 1][:3],
            INCOME: month_totals[INCOME],
            EXPENSE: month_totals[EXPENSE],
        })
    return pd.DataFrame(rows, columns=[MONTH, MONTH_LABEL, INCOME, EXPENSE])


def transaction_type_label(type_) -> str:
    """Get the display label of a transaction type, anything that is not income is labeled as an expense."""
    if type_ == TransactionTypes.INCOME.value:
        return TYPE_LABELS[TransactionTypes.INCOME.value]
    return TYPE_LABELS[TransactionTypes.EXPENSE.value]


def sort_newest_first(df: pd.DataFrame) -> pd.DataFrame:
    """Sort the transactions by date, newest first. transactions with an unparsable date go last."""
    df = ensure_columns(df)
    keys = pd.Series([_sortable_date(value) for value in df[date_col]], dtype=object)
    positions = keys.sort_values(ascending=False, kind='stable').index
    return df.iloc[positions]


def count_by_type(df: pd.DataFrame) -> dict[str, int]:
    """Count the income and the expense transactions."""
    incomes = int(is_income(df).sum())
    return {INCOME: incomes, EXPENSE: len(df) - incomes}


def split_by_type(df: pd.DataFrame) -> tuple[pd.DataFrame, pd.DataFrame]:
    """
    Split the transactions into income and expenses, each sorted newest first.

    Returns
    -------
    tuple[pd.DataFrame, pd.DataFrame]
        the income transactions and the expense transactions
    """
    df = ensure_columns(df)
    income_mask = is_income(df)
    return sort_newest_first(df.loc[income_mask]), sort_newest_first(df.loc[~income_mask])
