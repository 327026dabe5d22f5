"""Pass/fail assertions over the statistics of a completed load-test run."""

__version__ = "0.1.0"
