"""Command line entry points for the OneWire exporter; the Typer app lives in ``cli.app``."""
