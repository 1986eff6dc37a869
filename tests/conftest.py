"""Test configuration and fixtures."""

import os

import logfire

# Settings are read from the environment when the DI container resolves them
os.environ.setdefault("ENVIRONMENT", "test")

# Keep test output quiet and local
logfire.configure(send_to_logfire=False, console=False)
