"""Host adapters that embed an editor session in a UI toolkit."""
