"""Repository modules (imported by name, e.g. ``recipes_repo``)."""
