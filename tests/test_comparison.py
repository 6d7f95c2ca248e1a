import numpy as np
import pytest

from pinnode.evaluation import best_method, compare_methods, format_table


def test_compare_methods_table_layout():
    y = np.array([[0.0, 1.0, 2.0, 3.0]])
    table = compare_methods(y + 0.5, y + 0.1, y)
    assert set(table) == {'PINN', 'ODE'}
    assert set(table['PINN']) == {'MSE', 'RMSE', 'MAE', 'R2'}
    assert table['PINN']['MSE'] == pytest.approx(0.25)
    assert table['ODE']['MAE'] == pytest.approx(0.1)
    assert best_method(table) == 'ODE'


def test_best_method_prefers_lower_mse_and_breaks_ties_to_ode():
    row = {'MSE': 1.0, 'RMSE': 1.0, 'MAE': 1.0, 'R2': 0.0}
    better = {'MSE': 0.5, 'RMSE': 0.7, 'MAE': 0.5, 'R2': 0.5}
    assert best_method({'PINN': better, 'ODE': row}) == 'PINN'
    assert best_method({'PINN': row, 'ODE': dict(row)}) == 'ODE'


def test_format_table():
    y = np.array([[0.0, 1.0]])
    text = format_table(compare_methods(y, y + 1.0, y))
    lines = text.splitlines()
    assert lines[0].split() == ['Method', 'MSE', 'RMSE', 'MAE', 'R2']
    assert lines[1].startswith('PINN')
    assert lines[2].startswith('ODE')
    assert lines[-1] == 'Best (by MSE): PINN'
