"""Domain layer for gaurakshak application."""

__all__ = [
    "AccountService",
    "AnimalService",
    "LedgerService",
    "MilkService",
    "MovementService",
    "PopulationService",
    "RenewalService",
    "SupportService",
    "TransactionService",
    "UserService",
]

_SERVICE_MODULES = {
    "AccountService": "account",
    "AnimalService": "animal",
    "LedgerService": "ledger",
    "MilkService": "milk",
    "MovementService": "movement",
    "PopulationService": "population",
    "RenewalService": "renewal",
    "SupportService": "support",
    "TransactionService": "transaction",
    "UserService": "user",
}


# Services import the database layer, which imports domain.entities; load them
# lazily so importing either package first does not cycle.
def __getattr__(name):
    if name in _SERVICE_MODULES:
        from importlib import import_module

        module = import_module(f"gaurakshak.domain.{_SERVICE_MODULES[name]}")
        return getattr(module, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
