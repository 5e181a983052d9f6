"""HTTP surface of the shell (pages, lifecycle, navigation, health)."""
