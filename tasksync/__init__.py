"""Client-side sync layer for the project / task / subtask tracker."""

__version__ = "0.1.0"
