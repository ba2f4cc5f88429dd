"""Student records REST API: accounts, bearer-token auth and personal notes."""

__version__ = "2.0.0"
