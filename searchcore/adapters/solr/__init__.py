from .response import ExpandedGroup, ResponseAdapter

__all__ = ["ResponseAdapter", "ExpandedGroup"]
