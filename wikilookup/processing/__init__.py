"""Response reshaping helpers used by the lookups."""
