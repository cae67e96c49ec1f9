"""Use cases coordinating the notification store."""
