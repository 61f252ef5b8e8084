"""
Exceptions raised by the variant resolution services.
"""


class VariantResolutionError(Exception):
    """Base class for variant resolution failures."""


class EmptyVariantFamily(VariantResolutionError):
    """Raised when a matcher is handed an empty list of variants."""


class UnknownVariantOption(VariantResolutionError):
    """Raised when a selection refers to a group or option that does not exist."""

    def __init__(self, group_key, option_id=None):
        self.group_key = group_key
        self.option_id = option_id
        if option_id is None:
            message = f"Unknown variant group '{group_key}'"
        else:
            message = f"Unknown option '{option_id}' for variant group '{group_key}'"
        super().__init__(message)
