"""GauRakshak - gaushala livestock and ledger management."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())


# Import main lazily to avoid circular dependencies
def __getattr__(name):
    if name == "main":
        from gaurakshak.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
