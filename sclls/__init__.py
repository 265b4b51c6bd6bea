"""Language server that locates sphinx-needs requirement IDs in documents."""

__version__ = "0.0.1"
__all__ = ["documents", "lsp", "needs", "rpc", "server", "state"]