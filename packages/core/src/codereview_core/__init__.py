"""AI-assisted code review for a single source file."""
