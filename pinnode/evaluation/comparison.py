"""
Method Comparison
Side-by-side scores of the PINN surrogate and a numerical integrator
"""

from typing import Dict

from .metrics import compute_metrics

METHODS = ('PINN', 'ODE')
COLUMNS = ('MSE', 'RMSE', 'MAE', 'R2')


def compare_methods(pinn_pred, ode_pred, y_true) -> Dict[str, Dict[str, float]]:
    """
    Score both methods against the same held-out targets.

    Args:
        pinn_pred: PINN predictions [D, N]
        ode_pred: Integrator predictions [D, N]
        y_true: Observed states [D, N]

    Returns:
        {'PINN': {'MSE', 'RMSE', 'MAE', 'R2'}, 'ODE': {...}}
    """
    table = {}
    for method, pred in zip(METHODS, (pinn_pred, ode_pred)):
        overall = compute_metrics(pred, y_true)['overall']
        table[method] = {col: overall[col.lower()] for col in COLUMNS}
    return table


def best_method(table: Dict[str, Dict[str, float]]) -> str:
    """Method with the lower MSE; ties and NaN scores go to 'ODE'."""
    if table['PINN']['MSE'] < table['ODE']['MSE']:
        return 'PINN'
    return 'ODE'


def format_table(table: Dict[str, Dict[str, float]]) -> str:
    """Render the comparison as a fixed-width text table."""
    lines = [f"{'Method':<8}" + ''.join(f"{col:>14}" for col in COLUMNS)]
    for method in METHODS:
        row = table[method]
        lines.append(f"{method:<8}" + ''.join(f"{row[col]:>14.6e}" for col in COLUMNS))
    lines.append(f"Best (by MSE): {best_method(table)}")
    return '\n'.join(lines)
