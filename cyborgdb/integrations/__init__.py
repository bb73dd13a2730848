"""Optional framework integrations for CyborgDB."""
