"""Time spent and scroll depth records."""
