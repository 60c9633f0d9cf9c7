"""Value types and release rules."""
