"""Browser-driven tests for the notes app login screen."""
