from .restaurant_context import (
    DEFAULT_RESTAURANT_CONTEXT,
    MenuItem,
    RestaurantContext,
    build_system_prompt,
    format_menu,
)

__all__ = [
    "DEFAULT_RESTAURANT_CONTEXT",
    "MenuItem",
    "RestaurantContext",
    "build_system_prompt",
    "format_menu",
]
