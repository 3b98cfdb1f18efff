from tests.conftest import DataFixtures
from migasto.app.utils import plotting
from migasto.app.utils.aggregations import category_breakdown, yearly_series, totals, empty_transactions


class TestPlotting(DataFixtures):
    def test_income_vs_expense_pie(self):
        fig = plotting.pie_plot_income_vs_expense({'income': 100.0, 'expense': 40.0, 'balance': 60.0})
        assert list(fig.data[0].labels) == ['Ingresos', 'Gastos']
        assert list(fig.data[0].values) == [100.0, 40.0]

    def test_income_vs_expense_pie_without_data(self):
        fig = plotting.pie_plot_income_vs_expense(totals(empty_transactions()))
        assert list(fig.data[0].labels) == ['Sin movimientos']

    def test_categories_pie(self, transactions_data):
        fig = plotting.pie_plot_by_categories(category_breakdown(transactions_data))
        assert list(fig.data[0].labels) == ['Comida', 'Transporte', 'Hogar', 'Salud']

    def test_categories_pie_without_data(self):
        fig = plotting.pie_plot_by_categories(category_breakdown(empty_transactions()))
        assert list(fig.data[0].labels) == ['Sin gastos']

    def test_yearly_comparison_bar(self, transactions_data):
        fig = plotting.bar_plot_yearly_comparison(yearly_series(transactions_data, 2024), 2024)
        assert [trace.name for trace in fig.data] == ['Ingresos', 'Gastos']
        assert len(fig.data[0].x) == 12
        assert fig.layout.barmode == 'group'
