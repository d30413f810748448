"""Screen state machines rendered by the web layer."""
