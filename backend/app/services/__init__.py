"""Services module - clients for talking to a Lifeclock server."""

from .lifeclock_client import LifeclockClient

__all__ = ['LifeclockClient']
