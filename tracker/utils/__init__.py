"""Display helpers."""
from .formatting import FormatResources, format_duration, format_items, quality_label

__all__ = ["FormatResources", "format_duration", "format_items", "quality_label"]
