"""Qt adapters (requires PyQt6)."""
