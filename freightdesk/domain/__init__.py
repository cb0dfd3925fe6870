"""Framework-free domain models and rules."""
