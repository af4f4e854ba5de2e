"""LinkedIn domain: field selectors, profile normalization and the strategy."""
