"""HTTP dispatch layer for the CFMM engine."""
