"""CLI commands for imports-detector."""
