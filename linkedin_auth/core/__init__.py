"""Core building blocks shared across domains: config, logging, exceptions."""
