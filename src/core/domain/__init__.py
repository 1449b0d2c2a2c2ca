"""Modelos del dominio de pedidos.

- Configuración de clientes HTTP, direcciones e ítems de pedido (Pydantic v2).
- El dominio no conoce HTTP ni CLI; los registros remotos viajan como dict.
"""
