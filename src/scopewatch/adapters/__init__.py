"""Adapters binding the domain ports to HackerOne, Slack and the filesystem."""
