"""Servicios del Core (orquestación sin I/O directo).

Por qué:
- El store depende del contrato `MedicationRepository`, no del cliente HTTP.
"""
