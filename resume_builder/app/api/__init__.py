"""HTTP layer: request dependencies and the routers mounted by `create_app`."""
