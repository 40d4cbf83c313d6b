"""Layout helpers for presenting catalog entries."""

from .tag_flow import DEFAULT_SPACING, FlowLayout, Placement, Size, flow_layout, measure_tags

__all__ = ["DEFAULT_SPACING", "FlowLayout", "Placement", "Size", "flow_layout", "measure_tags"]
