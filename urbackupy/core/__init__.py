"""Core building blocks of urbackupy."""
