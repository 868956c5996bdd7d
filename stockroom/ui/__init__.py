from .helpers import show_error, show_success, show_warning

__all__ = ["show_error", "show_success", "show_warning"]
