"""
Infrastructure : persistance et ressources techniques.
"""
