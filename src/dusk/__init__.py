from .runtime import RuntimeContext, run, run_for_cli

__all__ = ["RuntimeContext", "run", "run_for_cli"]
