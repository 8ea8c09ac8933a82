from pymeerkat.plugins.case_transforms import apply_case_transforms
from pymeerkat.plugins.timestamps import apply_timestamps

__all__ = [
    "apply_case_transforms",
    "apply_timestamps",
]
