"""Flatten kubelet Summary API documents into tagged metric events."""

__version__ = "0.1.0"
