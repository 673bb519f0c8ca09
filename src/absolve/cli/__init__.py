"""Terminal front end for absolve."""
