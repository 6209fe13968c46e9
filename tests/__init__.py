"""
Gearbox Test Suite

Unit tests for models, key handling and collaborators, command tests run
against in-memory fakes, and CLI tests run end to end.
"""
