"""
Training Callbacks
Hooks into the epoch loop; ProgressCallback reports training progress
"""

import logging
import math

logger = logging.getLogger(__name__)


class Callback:
    """Base callback class."""

    def on_train_start(self, trainer) -> None:
        pass

    def on_epoch_start(self, epoch: int, trainer) -> None:
        pass

    def on_epoch_end(self, epoch: int, trainer, logs: dict) -> None:
        pass

    def on_train_end(self, trainer, history: dict) -> None:
        pass


def is_report_epoch(epoch: int, epochs: int, print_every: int) -> bool:
    """1-based epochs reported: the first, the last and every print_every-th."""
    return epoch == 1 or epoch == epochs or (print_every > 0 and epoch % print_every == 0)


class ProgressCallback(Callback):
    """
    Log training progress on the reporting cadence.

    Args:
        print_every: Report every N epochs (first and last are always reported)
        level: Logging level of the progress lines
    """

    def __init__(self, print_every: int = 50, level: int = logging.INFO):
        self.print_every = print_every
        self.level = level

    def on_epoch_end(self, epoch: int, trainer, logs: dict) -> None:
        epochs = trainer.config.epochs
        if not is_report_epoch(epoch, epochs, self.print_every):
            return

        if not math.isnan(logs.get('mse', float('nan'))):
            logger.log(
                self.level,
                "[%4d/%4d] lr=%.2e | loss=%.3e | MSE=%.3e, RMSE=%.3e, MAE=%.3f, R2=%.3f",
                epoch, epochs, logs['lr'], logs['loss'],
                logs['mse'], logs['rmse'], logs['mae'], logs['r2']
            )
        else:
            logger.log(
                self.level,
                "[%4d/%4d] lr=%.2e | loss=%.3e | (res=%.3e, ic=%.3e, data=%.3e)",
                epoch, epochs, logs['lr'], logs['loss'],
                logs['residual_term'], logs['ic_term'], logs['data_term']
            )
