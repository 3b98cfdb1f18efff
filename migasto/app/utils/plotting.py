import pandas as pd
import plotly.graph_objects as go

from migasto.app.naming_conventions import (
    TransactionsTableFields,
    CHART_COLORS,
    INCOME_COLOR,
    EXPENSE_COLOR,
    TOTAL,
    MONTH_LABEL,
    INCOME,
    EXPENSE,
)


category_col = TransactionsTableFields.CATEGORY.value


def pie_plot_income_vs_expense(period_totals: dict[str, float]) -> go.Figure:
    """
    Plot the income against the expenses of a period

    Parameters
    ----------
    period_totals : dict[str, float]
        the totals of the period, as returned by ``aggregations.totals``

    Returns
    -------
    go.Figure
        a pie chart with the income and the expenses slices
    """
    income = period_totals.get(INCOME, 0.0)
    expense = period_totals.get(EXPENSE, 0.0)
    has_data = income > 0 or expense > 0
    fig = go.Figure(
        go.Pie(
            labels=['Ingresos', 'Gastos'] if has_data else ['Sin movimientos'],
            values=[income, expense] if has_data else [1],
            marker=dict(colors=[INCOME_COLOR, EXPENSE_COLOR] if has_data else ['#e5e7eb']),
            textinfo='label+percent' if has_data else 'label',
            hole=0.3,
            sort=False,
        )
    )
    fig.update_layout(title_text='Ingresos vs Gastos')
    return fig


def pie_plot_by_categories(breakdown: pd.DataFrame) -> go.Figure:
    """
    Plot the expenses of a period by category

    Parameters
    ----------
    breakdown : pd.DataFrame
        the expenses of each category, as returned by ``aggregations.category_breakdown``

    Returns
    -------
    go.Figure
        a pie chart with a slice for each category
    """
    has_data = not breakdown.empty and breakdown[TOTAL].sum() > 0
    fig = go.Figure(
        go.Pie(
            labels=breakdown[category_col] if has_data else ['Sin gastos'],
            values=breakdown[TOTAL] if has_data else [1],
            marker=dict(colors=CHART_COLORS if has_data else ['#e5e7eb']),
            textinfo='label+percent' if has_data else 'label',
            hovertemplate='%{label}: $%{value:.2f}<extra></extra>',
            hole=0.3,
            sort=False,
        )
    )
    fig.update_layout(title_text='Gastos por Categoría')
    return fig


def bar_plot_yearly_comparison(series: pd.DataFrame, year: int) -> go.Figure:
    """
    Plot the income and expenses of every month of a year side by side

    Parameters
    ----------
    series : pd.DataFrame
        the monthly totals, as returned by ``aggregations.yearly_series``
    year : int
        the year of the series, used in the title

    Returns
    -------
    go.Figure
        a grouped bar plot with a pair of bars for each month
    """
    fig = go.Figure()
    fig.add_trace(go.Bar(x=series[MONTH_LABEL], y=series[INCOME], name='Ingresos', marker_color=INCOME_COLOR))
    fig.add_trace(go.Bar(x=series[MONTH_LABEL], y=series[EXPENSE], name='Gastos', marker_color=EXPENSE_COLOR))
    fig.update_layout(
        barmode='group',
        title=f'Comparativa Anual {year}',
        xaxis_title='Mes',
        yaxis_title='Monto [$]',
    )
    return fig
