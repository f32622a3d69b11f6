"""bcb_poupanca"""

__version__ = "0.1.0"
