"""Storefront HTTP API package.

Import from the submodules (``storefront.api.application`` for
``create_app``). ``storefront.init()`` loads each submodule by file path,
so this package must not import them itself.
"""
