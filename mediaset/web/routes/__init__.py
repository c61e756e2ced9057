"""Routes de l'API web."""
