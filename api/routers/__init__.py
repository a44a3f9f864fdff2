"""Route modules mounted by api.main."""
