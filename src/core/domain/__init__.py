"""Domain models and entities.

Pure, strict data structures (Pydantic v2). The domain knows nothing about
YAML, files or the CLI: only families, dictionaries and search paths.
"""
