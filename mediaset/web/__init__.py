"""
Interface web (FastAPI).
"""
