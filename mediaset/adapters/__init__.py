"""
Adapters : implementations concretes des ports (API externes, stockage
des images, parsing des imports, CLI).
"""
