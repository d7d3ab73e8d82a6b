"""Small helpers shared across pyprofi."""
