"""Test fakes for the OAuth domain."""
