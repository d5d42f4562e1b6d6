"""Domain layer - engines built on the container layer.

Each area wraps one or more containers from music_index.structures:
- library: Track records and multi-key LookupIndex
- playlists: ordered PlaylistIndex
- rating: RatingIndex over a rating tree
- playback: history, skip window, auto-replay
- analytics: dashboard aggregation
"""
