"""Infrastructure: key/value store implementations and store exceptions."""
