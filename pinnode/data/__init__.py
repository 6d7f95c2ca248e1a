"""
Datasets

- LabeledBatch: torch view of observations used by the data loss
- TimeSeries: numpy observations t [N], y [D, N]
- load_csv, synthesize, add_noise, split_train_test
"""

from .batch import LabeledBatch
from .timeseries import (
    SplitMode,
    TimeSeries,
    add_noise,
    load_csv,
    split_train_test,
    synthesize,
)

__all__ = [
    'LabeledBatch',
    'SplitMode',
    'TimeSeries',
    'add_noise',
    'load_csv',
    'split_train_test',
    'synthesize',
]
