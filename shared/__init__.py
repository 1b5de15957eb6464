"""Reusable core shared by the file agent and the orchestrator."""
