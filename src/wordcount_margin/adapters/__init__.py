"""Host adapters for concrete editors."""
