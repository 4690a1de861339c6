"""Production job ingestion, time metrics and reporting."""

__version__ = "0.1.0"
