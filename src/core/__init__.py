"""Core de medshelf: dominio, contratos, servicios y configuración."""
