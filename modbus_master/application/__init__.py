"""Application layer for the Modbus master.

Sits between callers and the domain/infrastructure layers: the request
orchestrator and the addressable object views built on it.
"""
