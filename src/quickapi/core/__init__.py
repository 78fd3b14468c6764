"""Core de quickapi: dominio, contratos, servicios y configuración."""
