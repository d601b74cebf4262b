"""Adapters — Slack transport and storage implementations of the ports."""
