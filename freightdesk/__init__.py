"""freightdesk: administration backend for a freight-shipping company."""

__version__ = "0.1.0"
