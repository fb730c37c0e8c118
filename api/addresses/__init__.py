"""Address resource: CRUD for standalone address rows."""
