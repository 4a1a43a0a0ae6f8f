"""configstore: persistent per-user key/value configuration storage."""

__version__ = "0.1.0"
