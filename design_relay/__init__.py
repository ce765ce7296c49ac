"""Channel relay and correlated command client for design-tool plugin sessions."""

__version__ = "0.1.0"

__all__ = ["__version__"]
