"""Adapters for the Cloudflare ranges feed and the Cloud Armor policy store."""
