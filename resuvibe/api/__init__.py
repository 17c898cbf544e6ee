"""ResuVibe REST API."""
