"""Course and unit content."""
