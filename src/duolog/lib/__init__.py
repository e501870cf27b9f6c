"""Project-agnostic libraries bundled with duolog."""
