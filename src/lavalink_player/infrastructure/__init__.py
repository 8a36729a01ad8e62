"""In-process implementations of domain ports."""
