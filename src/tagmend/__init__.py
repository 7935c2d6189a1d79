"""tagmend: repair garbled encodings and fill missing tags in audio collections."""

__version__ = "0.1.0"
