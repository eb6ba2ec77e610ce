"""Framework-level building blocks shared by the page helpers."""
