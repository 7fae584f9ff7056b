"""
Shared utility helpers.
"""

from .filesystem import file_lock, write_text_file

__all__ = ["file_lock", "write_text_file"]
