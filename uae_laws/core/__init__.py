"""Shared configuration, logging and exception types."""
