"""Domain model and reconciliation logic for Cloud Armor allowlist sync."""
