"""HTTP API for the Outpost rules engine."""
