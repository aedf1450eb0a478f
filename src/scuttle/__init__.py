"""scuttle — guild stats queries and broadcast fan-out."""

__version__ = "0.1.0"
