from typing import Any, Protocol


class AppHooks(Protocol):
    """
    Protocol for application hooks used by the derivation and statistics pipelines.
    This can be implemented by the calling application (notebook, report builder)
    to display progress or cancel a long run.

    Methods:
        report_step(info, target, reset_counter, plus_step) -> None:
            Report progress of the current stage.
        stop_requested() -> bool:
            Return True to stop the current stage early.
    """
    def report_step(self, info: str = "", target: int = None, reset_counter: bool = False, plus_step: int = 1) -> None:
        """
        Report progress messages from a pipeline stage.

        Args:
            info (str): Progress message.
            target (int): Target count for progress.
            reset_counter (bool): Whether to reset the counter.
            plus_step (int): Incremental step count.
        """
        pass

    def stop_requested(self) -> bool:
        """
        Check if a stop has been requested by the user.

        Returns:
            bool: True if stop is requested, False otherwise.
        """
        return False

    def update_key_value(self, key: str, value: Any) -> None:
        """
        Report a status update with a key-value pair.

        Args:
            key (str): Status key.
            value: Status value.
        """
        pass
