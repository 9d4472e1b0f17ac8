"""Speech recognition boundary."""
