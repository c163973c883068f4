"""Infrastructure layer for the Modbus master.

Concrete framings, checksums and transports behind the domain interfaces.
"""
