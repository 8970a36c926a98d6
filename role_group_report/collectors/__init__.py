from .groups import locate_groups, filter_by_suffix
from .members import enumerate_members

__all__ = [
    "locate_groups",
    "filter_by_suffix",
    "enumerate_members",
]
