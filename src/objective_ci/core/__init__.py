"""Core orchestration primitives: exclusions, command invocation, environment probes."""
