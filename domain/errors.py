from __future__ import annotations


class OptionNotFoundError(LookupError):
    pass


class LayoutNotFoundError(LookupError):
    pass


class DuplicateOptionError(ValueError):
    pass


class LabelNotFoundError(LookupError):
    pass


class DuplicateLabelError(ValueError):
    pass
