"""Domain base - exceptions, ports and the shared operation context."""
