"""Core interfaces.

Contracts (Protocol) that consumers of phrasebooks depend on, so session
drivers, exporters and the CLI do not need the concrete classes.
"""
