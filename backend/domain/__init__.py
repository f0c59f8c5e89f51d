"""Domain layer: session identity, meal ledger, adherence and user registry.

Pure business logic. Persistence is reached only through the ports in
domain.shared.ports.
"""
