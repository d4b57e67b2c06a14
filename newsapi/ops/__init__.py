"""Container lifecycle tooling (image build, compose, database shell)."""

from .stack import CleanReport, CommandError, OpsError, StackManager


__all__ = ["CleanReport", "CommandError", "OpsError", "StackManager"]
