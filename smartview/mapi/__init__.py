"""MAPI property tag and type definitions."""
