"""Create Google Docs from a tool-calling runtime, optionally seeded with content."""
