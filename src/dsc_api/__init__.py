"""REST API for the DSC stablecoin contracts."""

__version__ = "0.1.0"
