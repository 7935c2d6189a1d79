# Where: tagmend.shared
# What: Value objects shared between features and the UI.
# Why: Avoid import cycles between feature packages and presentation code.

from .media_record import MediaRecord, TagField

__all__ = ["MediaRecord", "TagField"]
