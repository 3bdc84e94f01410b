"""Unit view tracking and course progress."""
