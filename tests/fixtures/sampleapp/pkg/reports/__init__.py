"""A second namespace; Report depends on a table outside it."""
