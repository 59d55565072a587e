"""Application layer - messages, handlers, validation and response DTOs."""
