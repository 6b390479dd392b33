"""Core domain logic: exceptions, access filtering and retry policy."""
