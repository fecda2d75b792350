"""pygame front-end."""
