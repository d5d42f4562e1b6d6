"""Playlists domain - ordered track sequences.

Add/remove/move/reverse, pluggable sorting (merge/quick/heap), and
Fisher-Yates shuffling over a doubly-linked list.
"""

from .index import PlaylistIndex

__all__ = ["PlaylistIndex"]
