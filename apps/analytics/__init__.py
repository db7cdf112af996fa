"""Back-office dashboard statistics."""
