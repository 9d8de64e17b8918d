"""Process-wide services: telemetry and the buffer allocator."""
