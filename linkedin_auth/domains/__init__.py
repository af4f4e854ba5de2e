"""Domain packages.

Each domain owns its protocols, implementations, fakes and colocated tests.
"""
