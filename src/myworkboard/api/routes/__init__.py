"""API route modules."""

from myworkboard.api.routes import credential, my_work

__all__ = ["credential", "my_work"]
