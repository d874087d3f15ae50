from .bind import bind
from .map import map, transform, transform_error

__all__ = (
    "bind",
    "map",
    "transform",
    "transform_error",
)
