"""HTTP API surface: root router and shared dependencies."""
