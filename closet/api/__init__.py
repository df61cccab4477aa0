"""HTTP entrypoint."""
