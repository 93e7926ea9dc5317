"""Pipeline that sniffs, guards, probes and trims uploaded videos."""
