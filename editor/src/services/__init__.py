"""Application services: configuration, frame export and timing."""
