"""Core configuration, security, and authentication for the resume builder.

Notes:
    1. This file is intentionally empty as it is used to initialize the package.
    2. The functionality lives in the config, security, and auth submodules.

"""
