from .deferred import Deferrable, Deferred, State

__all__ = ("Deferrable", "Deferred", "State")
