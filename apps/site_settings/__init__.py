"""Key/value site settings shown on the public site and edited in the back office."""
