from .pool_state_provider import AbstractPoolStateProvider

__all__ = ("AbstractPoolStateProvider",)
