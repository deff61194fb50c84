"""Front end server-side para gerenciamento de eventos."""

__version__ = "0.1"
