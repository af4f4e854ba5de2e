"""OAuth 1.0a domain: signed transport and the generic three-legged strategy."""
