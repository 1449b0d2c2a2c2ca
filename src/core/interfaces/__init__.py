"""Contratos (Protocol) que el Core espera de los adaptadores.

Los servicios dependen de `RemoteAPI`, no de httpx.
"""
