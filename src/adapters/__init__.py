"""Adaptadores de I/O (HTTP, archivos).

Por qué un paquete:
- Aísla httpx y el sistema de archivos del Core.
"""
