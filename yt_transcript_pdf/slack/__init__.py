"""Slack bot integration (slack-bolt, Socket Mode)."""
