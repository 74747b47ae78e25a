"""UI tree rendering."""

from .service import UiTreeRenderer, activity_name, activity_names, layout_name

__all__ = ["UiTreeRenderer", "activity_name", "activity_names", "layout_name"]
